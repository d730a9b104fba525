"""
CutPlanner - Otimização de Cortes Guilhotina em Chapas

Posiciona peças retangulares em chapas de estoque respeitando o kerf da
serra e o refilo das bordas, e calcula o comprimento de corte de cada chapa.
"""

from .core import CutPlanner
from .allocator import AllocationResult, MultiBoardAllocator, UnplaceablePanel
from .cut_length import CutLengthEstimator
from .exceptions import CutPlannerError, InvalidBoardSpec, InvalidDemandItem
from .packing import Board, Rectangle
from .utils import CutPlannerReporter, setup_logging
from .models import (
    BoardLayout, BoardSpec, DemandItem, MaterialJob, MaterialMetrics, MaterialResult,
    OptimizationRequest, OptimizationResult, PanelOrder, Placement, Trim, UnplacedPart
)

__version__ = "2.0.0"
__author__ = "CutPlanner Team"

__all__ = [
    "CutPlanner",
    "MultiBoardAllocator",
    "AllocationResult",
    "UnplaceablePanel",
    "CutLengthEstimator",
    "Board",
    "Rectangle",
    "CutPlannerReporter",
    "setup_logging",
    "CutPlannerError",
    "InvalidBoardSpec",
    "InvalidDemandItem",
    "BoardSpec",
    "Trim",
    "DemandItem",
    "MaterialJob",
    "PanelOrder",
    "OptimizationRequest",
    "OptimizationResult",
    "MaterialResult",
    "MaterialMetrics",
    "BoardLayout",
    "Placement",
    "UnplacedPart",
]
