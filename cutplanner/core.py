"""
Núcleo do sistema CutPlanner: otimização de chapas por material
"""

import time
from typing import List, Optional

import numpy as np

from .allocator import AllocationResult, MultiBoardAllocator
from .config import get_settings
from .cut_length import CutLengthEstimator
from .exceptions import CutPlannerError
from .models import (
    BoardLayout, BoardSpec, DemandItem, FreeArea, MaterialJob, MaterialMetrics,
    MaterialResult, OptimizationRequest, OptimizationResult, PanelOrder,
    Placement, UnplacedPart
)
from .packing import Board
from .utils import get_logger

logger = get_logger("core")


class CutPlanner:
    """
    Sistema principal de otimização de cortes
    """

    def __init__(self, usage_limit: Optional[float] = None, strip_tolerance: Optional[float] = None):
        """
        Inicializa o planejador de cortes

        Args:
            usage_limit: Aproveitamento (%) para contar a chapa como inteira
            strip_tolerance: Tolerância (mm) para agrupar peças em faixas
        """
        settings = get_settings()
        self.usage_limit = usage_limit if usage_limit is not None else settings.usage_limit
        self.estimator = CutLengthEstimator(strip_tolerance)

    def optimize(self, request: OptimizationRequest) -> OptimizationResult:
        """
        Otimiza todos os materiais da requisição

        Cada material é processado de forma independente; um material com
        chapa inválida não impede o processamento dos demais.

        Args:
            request: Requisição de otimização

        Returns:
            Resultado da otimização
        """
        start_time = time.time()
        usage_limit = request.usage_limit if request.usage_limit is not None else self.usage_limit

        materials = [
            self.optimize_material(
                job,
                order=request.order,
                max_boards=request.max_boards,
                usage_limit=usage_limit,
                lookahead=request.lookahead,
            )
            for job in request.materials
        ]

        errors = {m.material_id: m.error for m in materials if m.error}
        processing_time = (time.time() - start_time) * 1000

        return OptimizationResult(
            success=not errors,
            materials=materials,
            total_cut_length=sum(m.metrics.total_cut_length for m in materials),
            processing_time=processing_time,
            metadata={
                "order": request.order.value,
                "lookahead": request.lookahead,
                "usage_limit": usage_limit,
                **({"error": errors} if errors else {}),
            },
        )

    def optimize_material(
        self,
        job: MaterialJob,
        order: PanelOrder = PanelOrder.INPUT,
        max_boards: Optional[int] = None,
        usage_limit: Optional[float] = None,
        lookahead: int = 0,
    ) -> MaterialResult:
        """
        Otimiza um único material

        Args:
            job: Material com chapa e peças
            order: Ordem de processamento das peças
            max_boards: Limite de chapas
            usage_limit: Aproveitamento (%) para contar a chapa como inteira
            lookahead: Peças iniciais com orientação testada

        Returns:
            Resultado do material (com `error` preenchido se a chapa for inválida)
        """
        try:
            allocator = MultiBoardAllocator(
                job.board,
                order=order,
                max_boards=max_boards,
                grain_direction=job.grain_direction,
                lookahead=lookahead,
            )
        except CutPlannerError as e:
            logger.error(f"Material {job.id}: {e}")
            return MaterialResult(material_id=job.id, material_name=job.name, error=str(e))

        allocation = allocator.allocate(job.parts)
        cut_lengths = self.estimator.estimate_many(allocation.boards, job.board.trim)

        boards = [
            self._board_layout(index, board, cut_length, job.board)
            for index, (board, cut_length) in enumerate(zip(allocation.boards, cut_lengths), 1)
        ]
        unplaced = [
            UnplacedPart(
                part_id=item.panel.label or "",
                width=item.panel.width,
                height=item.panel.height,
                reason=item.reason,
            )
            for item in allocation.unplaced
        ]

        limit = usage_limit if usage_limit is not None else self.usage_limit
        metrics = self._calculate_metrics(allocation, cut_lengths, job.board, limit)

        logger.info(
            f"Material {job.name}: {metrics.placed_count} placed, "
            f"{metrics.unplaced_count} unplaced, {metrics.boards_used} boards"
        )

        return MaterialResult(
            material_id=job.id,
            material_name=job.name,
            boards=boards,
            unplaced=unplaced,
            rejected=allocation.rejected,
            metrics=metrics,
        )

    def optimize_boards(self, board: BoardSpec, parts: List[DemandItem], **kwargs) -> MaterialResult:
        """Método de conveniência para um único material"""
        job = MaterialJob(
            id=kwargs.pop("material_id", "material"),
            name=kwargs.pop("material_name", "Material"),
            board=board,
            parts=parts,
            grain_direction=kwargs.pop("grain_direction", False),
        )
        return self.optimize_material(job, **kwargs)

    def _board_layout(self, index: int, board: Board, cut_length: float, spec: BoardSpec) -> BoardLayout:
        """Converte uma chapa preenchida para o formato de saída"""
        placements = [
            Placement(
                part_id=rect.label or f"panel-{n}",
                x=rect.x,
                y=rect.y,
                stock_x=rect.x + spec.trim.left,
                stock_y=rect.y + spec.trim.top,
                width=rect.width,
                height=rect.height,
                rotated=rect.rotated,
            )
            for n, rect in enumerate(board.placed, 1)
        ]
        free = [FreeArea(x=r.x, y=r.y, width=r.width, height=r.height) for r in board.free]

        return BoardLayout(
            index=index,
            width=board.width,
            height=board.height,
            placements=placements,
            free=free,
            cut_length=cut_length,
            utilization=board.utilization,
        )

    def _calculate_metrics(
        self,
        allocation: AllocationResult,
        cut_lengths: List[float],
        spec: BoardSpec,
        usage_limit: float,
    ) -> MaterialMetrics:
        """Calcula aproveitamento, desperdício e uso de chapas"""
        boards = allocation.boards
        used = np.array([board.used_area for board in boards], dtype=float)
        utilization = np.array([board.utilization for board in boards], dtype=float)

        used_area = float(used.sum())
        board_area = spec.area * len(boards)
        waste_pct = ((board_area - used_area) / board_area) * 100 if board_area > 0 else 0.0

        # Chapas abaixo do limite são cobradas por m² usado
        below_limit = utilization < usage_limit
        extra_square_meters = sum(round(area / 1_000_000, 2) for area in used[below_limit])

        return MaterialMetrics(
            used_area=used_area,
            board_area=board_area,
            waste_pct=round(waste_pct, 2),
            placed_count=allocation.placed_count,
            unplaced_count=len(allocation.unplaced),
            boards_used=len(boards),
            total_cut_length=float(sum(cut_lengths)),
            full_boards=int(np.count_nonzero(~below_limit)),
            extra_square_meters=round(extra_square_meters, 2),
        )
