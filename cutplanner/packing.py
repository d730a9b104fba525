"""
Empacotamento guilhotina 2D: retângulos, chapas e escolha best-fit

Cada chapa mantém a lista de peças posicionadas e a lista de retângulos
livres. A inserção percorre os retângulos livres, avalia a peça na
orientação original e girada 90°, escolhe o melhor candidato e divide
o espaço restante com corte horizontal primeiro.
"""

from dataclasses import dataclass, replace
from typing import List, NamedTuple, Optional, Tuple


@dataclass(frozen=True)
class Rectangle:
    """Retângulo alinhado aos eixos (origem no canto superior esquerdo)"""
    width: float
    height: float
    x: float = 0
    y: float = 0
    rotatable: bool = False
    rotated: bool = False
    label: Optional[str] = None

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def original_size(self) -> Tuple[float, float]:
        """Dimensões (largura, altura) antes de qualquer rotação"""
        if self.rotated:
            return (self.height, self.width)
        return (self.width, self.height)

    def overlaps(self, other: "Rectangle") -> bool:
        """Verifica sobreposição de área (bordas encostadas não contam)"""
        return (self.x < other.right and other.x < self.right and
                self.y < other.bottom and other.y < self.bottom)


class Candidate(NamedTuple):
    """Posição candidata para uma peça dentro de um retângulo livre"""
    index: int
    free_rect: Rectangle
    width: float
    height: float
    rotated: bool

    @property
    def waste(self) -> float:
        return (self.free_rect.width - self.width) * (self.free_rect.height - self.height)

    def sort_key(self) -> Tuple[float, float, float]:
        # Mais acima, depois mais à esquerda, depois menor sobra
        return (self.free_rect.y, self.free_rect.x, self.waste)


def fits(free_rect: Rectangle, width: float, height: float, kerf: float) -> bool:
    """
    Verifica se uma peça cabe no retângulo livre

    O kerf só é exigido no eixo em que sobra material a ser cortado;
    uma peça que preenche exatamente o eixo não precisa de kerf nele.
    """
    kerf_x = kerf if free_rect.width > width else 0
    kerf_y = kerf if free_rect.height > height else 0
    return free_rect.width >= width + kerf_x and free_rect.height >= height + kerf_y


def find_best_fit(free_rects: List[Rectangle], panel: Rectangle, kerf: float) -> Optional[Candidate]:
    """
    Encontra o melhor candidato entre todos os retângulos livres

    Args:
        free_rects: Retângulos livres da chapa
        panel: Peça a posicionar
        kerf: Espessura da serra

    Returns:
        Melhor candidato ou None se a peça não couber em lugar nenhum
    """
    best: Optional[Candidate] = None

    for index, free_rect in enumerate(free_rects):
        orientations = [(panel.width, panel.height, False)]
        if panel.rotatable:
            orientations.append((panel.height, panel.width, True))

        for width, height, rotated in orientations:
            if not fits(free_rect, width, height, kerf):
                continue
            candidate = Candidate(index, free_rect, width, height, rotated)
            if best is None or candidate.sort_key() < best.sort_key():
                best = candidate

    return best


def split_free_space(free_rect: Rectangle, placed: Rectangle, kerf: float) -> List[Rectangle]:
    """
    Divide o espaço restante após posicionar uma peça (horizontal primeiro)

    A sobra à direita ocupa apenas a altura da peça; a sobra abaixo ocupa
    a largura total do retângulo livre original. Sobras menores ou iguais
    ao kerf viram desperdício.
    """
    remainders = []

    width_remainder = free_rect.width - placed.width
    if width_remainder > kerf:
        remainders.append(Rectangle(
            width=width_remainder - kerf,
            height=placed.height,
            x=free_rect.x + placed.width + kerf,
            y=free_rect.y,
        ))

    height_remainder = free_rect.height - placed.height
    if height_remainder > kerf:
        remainders.append(Rectangle(
            width=free_rect.width,
            height=height_remainder - kerf,
            x=free_rect.x,
            y=free_rect.y + placed.height + kerf,
        ))

    return remainders


class Board:
    """
    Chapa de estoque com área útil, peças posicionadas e espaço livre
    """

    def __init__(self, width: float, height: float, kerf: float = 0):
        """
        Inicializa a chapa vazia

        Args:
            width: Largura útil (mm)
            height: Altura útil (mm)
            kerf: Espessura da serra (mm)
        """
        self.width = width
        self.height = height
        self.kerf = kerf
        self.placed: List[Rectangle] = []
        self.free: List[Rectangle] = [Rectangle(width, height)]

    def insert(self, panel: Rectangle, kerf: Optional[float] = None) -> Optional[Rectangle]:
        """
        Tenta posicionar a peça na chapa

        A peça recebida não é alterada: a peça posicionada é um novo
        retângulo, já na orientação final.

        Args:
            panel: Peça a posicionar
            kerf: Espessura da serra (padrão: kerf da chapa)

        Returns:
            Retângulo posicionado ou None se não couber
        """
        if kerf is None:
            kerf = self.kerf

        candidate = find_best_fit(self.free, panel, kerf)
        if candidate is None:
            return None

        free_rect = self.free.pop(candidate.index)
        placed = replace(
            panel,
            width=candidate.width,
            height=candidate.height,
            x=free_rect.x,
            y=free_rect.y,
            rotated=panel.rotated != candidate.rotated,
        )
        self.placed.append(placed)
        self.free.extend(split_free_space(free_rect, placed, kerf))
        return placed

    @property
    def is_empty(self) -> bool:
        return not self.placed

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def used_area(self) -> float:
        return sum(rect.area for rect in self.placed)

    @property
    def utilization(self) -> float:
        """Aproveitamento percentual da área útil"""
        if self.area <= 0:
            return 0.0
        return (self.used_area / self.area) * 100

    def __repr__(self) -> str:
        return f"Board({self.width}x{self.height}, placed={len(self.placed)}, free={len(self.free)})"
