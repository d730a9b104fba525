"""
Modelos de dados para o sistema CutPlanner
"""

from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field
from enum import Enum

from .config import get_settings


class PanelOrder(str, Enum):
    """Ordem de processamento das peças"""
    INPUT = "input"           # Ordem em que as peças foram informadas
    AREA_DESC = "area_desc"   # Maior área primeiro


class Trim(BaseModel):
    """Refilo removido de cada borda da chapa bruta"""
    top: float = Field(0, description="Refilo superior (mm)")
    right: float = Field(0, description="Refilo direito (mm)")
    bottom: float = Field(0, description="Refilo inferior (mm)")
    left: float = Field(0, description="Refilo esquerdo (mm)")

    @property
    def is_zero(self) -> bool:
        """Sem refilo em nenhuma borda"""
        return not (self.top > 0 or self.right > 0 or self.bottom > 0 or self.left > 0)


class BoardSpec(BaseModel):
    """Especificação da chapa de estoque"""
    width: float = Field(..., description="Largura da chapa bruta (mm)")
    height: float = Field(..., description="Altura da chapa bruta (mm)")
    kerf: float = Field(default_factory=lambda: get_settings().default_kerf, description="Espessura da serra (mm)")
    trim: Trim = Field(default_factory=Trim, description="Refilo das bordas")

    @property
    def usable_width(self) -> float:
        """Largura útil após o refilo"""
        return self.width - self.trim.left - self.trim.right

    @property
    def usable_height(self) -> float:
        """Altura útil após o refilo"""
        return self.height - self.trim.top - self.trim.bottom

    @property
    def area(self) -> float:
        return self.width * self.height


class DemandItem(BaseModel):
    """Peça a ser cortada, com quantidade"""
    id: Optional[str] = Field(None, description="Identificador da peça")
    name: Optional[str] = Field(None, description="Nome descritivo da peça")
    width: float = Field(..., description="Largura (mm)")
    height: float = Field(..., description="Altura (mm)")
    quantity: int = Field(1, description="Quantidade necessária")
    rotatable: bool = Field(True, description="Permite rotação de 90°")

    @property
    def area(self) -> float:
        return self.width * self.height


class MaterialJob(BaseModel):
    """Um material: chapa de estoque e lista de peças"""
    id: str = Field(..., description="Identificador do material")
    name: str = Field(..., description="Nome do material")
    board: BoardSpec = Field(..., description="Chapa de estoque")
    parts: List[DemandItem] = Field(..., description="Peças a cortar")
    grain_direction: bool = Field(False, description="Material com veio (sem rotação)")


class OptimizationRequest(BaseModel):
    """Requisição para otimização"""
    materials: List[MaterialJob] = Field(..., description="Materiais a otimizar")
    order: PanelOrder = Field(PanelOrder.INPUT, description="Ordem de processamento das peças")
    max_boards: Optional[int] = Field(None, ge=1, description="Máximo de chapas por material")
    lookahead: int = Field(0, ge=0, le=5, description="Peças iniciais com orientação testada (0 = desligado)")
    usage_limit: Optional[float] = Field(
        None, ge=0, le=100,
        description="Aproveitamento (%) para contar a chapa como inteira"
    )


class Placement(BaseModel):
    """Peça posicionada em uma chapa"""
    part_id: str = Field(..., description="ID da peça (instância)")
    x: float = Field(..., description="Posição X na área útil (mm)")
    y: float = Field(..., description="Posição Y na área útil (mm)")
    stock_x: float = Field(..., description="Posição X na chapa bruta (mm)")
    stock_y: float = Field(..., description="Posição Y na chapa bruta (mm)")
    width: float = Field(..., description="Largura como posicionada (mm)")
    height: float = Field(..., description="Altura como posicionada (mm)")
    rotated: bool = Field(False, description="Se a peça foi girada 90°")


class FreeArea(BaseModel):
    """Retângulo livre remanescente (diagnóstico)"""
    x: float
    y: float
    width: float
    height: float


class BoardLayout(BaseModel):
    """Plano de corte de uma chapa"""
    index: int = Field(..., description="Número da chapa (a partir de 1)")
    width: float = Field(..., description="Largura útil (mm)")
    height: float = Field(..., description="Altura útil (mm)")
    placements: List[Placement] = Field(..., description="Peças posicionadas")
    free: List[FreeArea] = Field(default_factory=list, description="Espaço livre remanescente")
    cut_length: float = Field(..., description="Comprimento total de corte (mm)")
    utilization: float = Field(..., description="Aproveitamento percentual da área útil")


class UnplacedPart(BaseModel):
    """Peça que não pôde ser posicionada"""
    part_id: str = Field(..., description="ID da peça (instância)")
    width: float = Field(..., description="Largura (mm)")
    height: float = Field(..., description="Altura (mm)")
    reason: str = Field(..., description="Motivo")


class RejectedItem(BaseModel):
    """Item de demanda rejeitado na validação"""
    index: int = Field(..., description="Posição do item na lista de demanda")
    item_id: Optional[str] = Field(None, description="ID do item")
    reason: str = Field(..., description="Motivo da rejeição")


class MaterialMetrics(BaseModel):
    """Métricas de aproveitamento de um material"""
    used_area: float = Field(0, description="Área das peças posicionadas (mm²)")
    board_area: float = Field(0, description="Área bruta das chapas usadas (mm²)")
    waste_pct: float = Field(0, description="Desperdício percentual")
    placed_count: int = Field(0, description="Peças posicionadas")
    unplaced_count: int = Field(0, description="Peças não posicionadas")
    boards_used: int = Field(0, description="Chapas utilizadas")
    total_cut_length: float = Field(0, description="Comprimento total de corte (mm)")
    full_boards: int = Field(0, description="Chapas acima do limite de aproveitamento")
    extra_square_meters: float = Field(0, description="Área (m²) das chapas abaixo do limite")


class MaterialResult(BaseModel):
    """Resultado da otimização de um material"""
    material_id: str
    material_name: str
    boards: List[BoardLayout] = Field(default_factory=list)
    unplaced: List[UnplacedPart] = Field(default_factory=list)
    rejected: List[RejectedItem] = Field(default_factory=list)
    metrics: MaterialMetrics = Field(default_factory=MaterialMetrics)
    error: Optional[str] = Field(None, description="Erro de validação do material")

    @property
    def board_cut_lengths(self) -> Dict[int, float]:
        """Comprimento de corte por chapa, indexado pelo número da chapa"""
        return {board.index: board.cut_length for board in self.boards}


class OptimizationResult(BaseModel):
    """Resultado completo da otimização"""
    success: bool = Field(..., description="Se todos os materiais foram processados")
    materials: List[MaterialResult] = Field(..., description="Resultado por material")
    total_cut_length: float = Field(0, description="Comprimento total de corte (mm)")
    processing_time: float = Field(0, description="Tempo de processamento (ms)")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Metadados adicionais")
