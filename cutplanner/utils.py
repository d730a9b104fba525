"""
Utilitários de log e relatórios do CutPlanner
"""

import logging
from typing import TYPE_CHECKING, Optional

import pandas as pd
from rich.console import Console
from rich.logging import RichHandler

from .config import get_settings

if TYPE_CHECKING:
    from .models import OptimizationResult

console = Console()


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configura o logger do pacote com o handler do Rich

    Args:
        level: Nível de log (padrão: `log_level` das configurações)
    """
    logger = logging.getLogger("cutplanner")
    logger.setLevel((level or get_settings().log_level).upper())

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=console, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Retorna o logger de um módulo"""
    return logging.getLogger(f"cutplanner.{name}")


class CutPlannerReporter:
    """Classe para geração de relatórios"""

    def __init__(self, result: "OptimizationResult"):
        """
        Inicializa o gerador de relatórios

        Args:
            result: Resultado da otimização
        """
        self.result = result

    def generate_text_report(self) -> str:
        """Gera relatório em formato texto"""
        report = []
        report.append("=" * 60)
        report.append("RELATÓRIO DE OTIMIZAÇÃO DE CORTES")
        report.append("=" * 60)
        report.append("")

        report.append("RESUMO GERAL:")
        report.append(f"  • Materiais: {len(self.result.materials)}")
        report.append(f"  • Comprimento Total de Corte: {self.result.total_cut_length / 1000:.2f} m")
        report.append(f"  • Tempo de Processamento: {self.result.processing_time:.1f} ms")
        report.append("")

        for i, material in enumerate(self.result.materials, 1):
            report.append(f"{i}. {material.material_name}:")
            if material.error:
                report.append(f"   • Erro: {material.error}")
                continue

            metrics = material.metrics
            report.append(f"   • Chapas utilizadas: {metrics.boards_used}")
            report.append(f"   • Peças posicionadas: {metrics.placed_count}")
            report.append(f"   • Desperdício: {metrics.waste_pct:.2f}%")
            report.append(f"   • Corte: {metrics.total_cut_length / 1000:.2f} m")

            for board in material.boards:
                report.append(
                    f"     Chapa {board.index}: {len(board.placements)} peças, "
                    f"aproveitamento {board.utilization:.1f}%, corte {board.cut_length:.0f} mm"
                )

            for part in material.unplaced:
                report.append(f"     ✗ {part.part_id} ({part.width}x{part.height}): {part.reason}")
            for item in material.rejected:
                report.append(f"     ✗ item #{item.index}: {item.reason}")
            report.append("")

        report.append("=" * 60)
        report.append(f"Gerado em {pd.Timestamp.now().strftime('%d/%m/%Y %H:%M:%S')}")

        return "\n".join(report)

    def placements_frame(self) -> pd.DataFrame:
        """Tabela com uma linha por peça posicionada"""
        rows = []
        for material in self.result.materials:
            for board in material.boards:
                for placement in board.placements:
                    rows.append({
                        "material_id": material.material_id,
                        "board": board.index,
                        "part_id": placement.part_id,
                        "x": placement.stock_x,
                        "y": placement.stock_y,
                        "width": placement.width,
                        "height": placement.height,
                        "rotated": placement.rotated,
                    })
        return pd.DataFrame(
            rows,
            columns=["material_id", "board", "part_id", "x", "y", "width", "height", "rotated"],
        )

    def boards_frame(self) -> pd.DataFrame:
        """Tabela com uma linha por chapa"""
        rows = [
            {
                "material_id": material.material_id,
                "board": board.index,
                "panels": len(board.placements),
                "utilization": board.utilization,
                "cut_length": board.cut_length,
            }
            for material in self.result.materials
            for board in material.boards
        ]
        return pd.DataFrame(
            rows,
            columns=["material_id", "board", "panels", "utilization", "cut_length"],
        )
