"""
Alocação de peças em múltiplas chapas
"""

from dataclasses import dataclass, field, replace
from itertools import product
from typing import List, Optional, Sequence, Tuple

from .exceptions import InvalidBoardSpec, InvalidDemandItem
from .models import BoardSpec, DemandItem, PanelOrder, RejectedItem
from .packing import Board, Rectangle
from .utils import get_logger

logger = get_logger("allocator")

REASON_TOO_LARGE = "Panel does not fit the board in any orientation"
REASON_BOARD_LIMIT = "board limit reached"


@dataclass
class UnplaceablePanel:
    """Peça que não pode ser posicionada em nenhuma chapa"""
    panel: Rectangle
    reason: str


@dataclass
class AllocationResult:
    """Chapas preenchidas e peças não atendidas"""
    boards: List[Board] = field(default_factory=list)
    unplaced: List[UnplaceablePanel] = field(default_factory=list)
    rejected: List[RejectedItem] = field(default_factory=list)

    @property
    def placed_count(self) -> int:
        return sum(len(board.placed) for board in self.boards)

    @property
    def waste(self) -> float:
        """Área útil não ocupada somando todas as chapas"""
        return sum(board.area - board.used_area for board in self.boards)

    def score(self) -> Tuple[int, int, float]:
        # Mais peças posicionadas, depois menos chapas, depois menos sobra
        return (-self.placed_count, len(self.boards), self.waste)


def validate_board_spec(spec: BoardSpec) -> None:
    """
    Valida a especificação da chapa antes de qualquer alocação

    Raises:
        InvalidBoardSpec: Dimensão ou kerf não positivos, refilo negativo
            ou refilo que consome todo um eixo
    """
    if spec.width <= 0:
        raise InvalidBoardSpec(f"Board width must be positive, got {spec.width}", field="width")
    if spec.height <= 0:
        raise InvalidBoardSpec(f"Board height must be positive, got {spec.height}", field="height")
    if spec.kerf <= 0:
        raise InvalidBoardSpec(f"Kerf must be positive, got {spec.kerf}", field="kerf")

    for side in ("top", "right", "bottom", "left"):
        if getattr(spec.trim, side) < 0:
            raise InvalidBoardSpec(f"Trim {side} cannot be negative", field=f"trim.{side}")

    if spec.usable_width <= 0:
        raise InvalidBoardSpec(
            f"Left/right trim ({spec.trim.left}+{spec.trim.right}) exceeds board width {spec.width}",
            field="trim",
        )
    if spec.usable_height <= 0:
        raise InvalidBoardSpec(
            f"Top/bottom trim ({spec.trim.top}+{spec.trim.bottom}) exceeds board height {spec.height}",
            field="trim",
        )


def validate_demand_item(item: DemandItem, index: Optional[int] = None) -> None:
    """
    Valida um item de demanda

    Raises:
        InvalidDemandItem: Largura, altura ou quantidade não positivas
    """
    if item.width <= 0:
        raise InvalidDemandItem(f"Width must be positive, got {item.width}", index=index)
    if item.height <= 0:
        raise InvalidDemandItem(f"Height must be positive, got {item.height}", index=index)
    if item.quantity <= 0:
        raise InvalidDemandItem(f"Quantity must be positive, got {item.quantity}", index=index)


def expand_demand(
    items: Sequence[DemandItem],
    grain_direction: bool = False,
) -> Tuple[List[Rectangle], List[RejectedItem]]:
    """
    Expande os itens de demanda em peças individuais

    Args:
        items: Itens com quantidade
        grain_direction: Material com veio, nenhuma peça pode girar

    Returns:
        Tupla (peças, itens rejeitados)
    """
    panels: List[Rectangle] = []
    rejected: List[RejectedItem] = []

    for index, item in enumerate(items):
        try:
            validate_demand_item(item, index)
        except InvalidDemandItem as e:
            logger.warning(f"Rejecting demand item #{index} ({item.id}): {e}")
            rejected.append(RejectedItem(index=index, item_id=item.id, reason=str(e)))
            continue

        base_id = item.id or f"item{index + 1}"
        for i in range(item.quantity):
            panels.append(Rectangle(
                width=item.width,
                height=item.height,
                rotatable=item.rotatable and not grain_direction,
                label=f"{base_id}-{i + 1}",
            ))

    return panels, rejected


def order_panels(panels: List[Rectangle], order: PanelOrder) -> List[Rectangle]:
    """Ordena as peças conforme a estratégia escolhida (ordenação estável)"""
    if order == PanelOrder.AREA_DESC:
        return sorted(panels, key=lambda p: p.area, reverse=True)
    return list(panels)


def lock_orientation(panel: Rectangle, rotate: bool) -> Rectangle:
    """Cópia da peça com orientação fixa (girada 90° se `rotate`)"""
    if rotate:
        return replace(
            panel,
            width=panel.height,
            height=panel.width,
            rotatable=False,
            rotated=not panel.rotated,
        )
    return replace(panel, rotatable=False)


def orientation_combinations(panels: Sequence[Rectangle], lookahead: int) -> List[List[Rectangle]]:
    """
    Gera as variantes da lista com as primeiras peças giráveis travadas

    Args:
        panels: Peças já ordenadas
        lookahead: Quantas peças do início testar

    Returns:
        Uma lista de peças por combinação, começando por todas sem giro;
        vazia se nenhuma das primeiras peças puder girar
    """
    indices = [i for i, panel in enumerate(panels[:lookahead]) if panel.rotatable]
    if not indices:
        return []

    variants = []
    for combo in product((False, True), repeat=len(indices)):
        variant = list(panels)
        for index, rotate in zip(indices, combo):
            variant[index] = lock_orientation(panels[index], rotate)
        variants.append(variant)
    return variants


class MultiBoardAllocator:
    """
    Distribui as peças nas chapas abertas, abrindo novas quando necessário
    """

    def __init__(
        self,
        spec: BoardSpec,
        order: PanelOrder = PanelOrder.INPUT,
        max_boards: Optional[int] = None,
        grain_direction: bool = False,
        lookahead: int = 0,
    ):
        """
        Inicializa o alocador

        Args:
            spec: Especificação da chapa
            order: Ordem de processamento das peças
            max_boards: Limite de chapas abertas (None = sem limite)
            grain_direction: Material com veio (desativa rotação)
            lookahead: Quantas peças iniciais têm a orientação testada (0 = desligado)

        Raises:
            InvalidBoardSpec: Se a especificação for inválida
        """
        validate_board_spec(spec)
        self.spec = spec
        self.order = order
        self.max_boards = max_boards
        self.grain_direction = grain_direction
        self.lookahead = lookahead

    def new_board(self) -> Board:
        """Cria uma chapa vazia com a área útil da especificação"""
        return Board(self.spec.usable_width, self.spec.usable_height, self.spec.kerf)

    def allocate(self, items: Sequence[DemandItem]) -> AllocationResult:
        """
        Posiciona todas as peças da demanda

        Args:
            items: Lista de itens de demanda

        Returns:
            Resultado com chapas, peças não posicionadas e itens rejeitados
        """
        panels, rejected = expand_demand(items, self.grain_direction)
        ordered = order_panels(panels, self.order)

        result = None
        for n, variant in enumerate(orientation_combinations(ordered, self.lookahead)):
            candidate = self._pack(variant)
            if result is None or candidate.score() < result.score():
                logger.debug(f"Look-ahead combination {n} wins: {candidate.score()}")
                result = candidate
        if result is None:
            result = self._pack(ordered)
        result.rejected = rejected

        logger.debug(
            f"Allocated {result.placed_count}/{len(panels)} panels on {len(result.boards)} boards"
        )
        return result

    def _pack(self, panels: Sequence[Rectangle]) -> AllocationResult:
        result = AllocationResult()
        for panel in panels:
            self._place(panel, result)
        return result

    def _place(self, panel: Rectangle, result: AllocationResult) -> None:
        for board in result.boards:
            if board.insert(panel) is not None:
                return

        board = self.new_board()
        if board.insert(panel) is None:
            # Nem uma chapa vazia comporta a peça
            logger.warning(
                f"Panel {panel.label} ({panel.width}x{panel.height}) does not fit "
                f"a {board.width}x{board.height} board"
            )
            result.unplaced.append(UnplaceablePanel(panel, REASON_TOO_LARGE))
            return

        if self.max_boards is not None and len(result.boards) >= self.max_boards:
            logger.warning(f"Panel {panel.label} not placed: {REASON_BOARD_LIMIT}")
            result.unplaced.append(UnplaceablePanel(panel, REASON_BOARD_LIMIT))
            return

        logger.debug(f"Opened board #{len(result.boards) + 1} for panel {panel.label}")
        result.boards.append(board)
