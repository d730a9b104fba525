"""
Exceções do CutPlanner
"""

from typing import Optional


class CutPlannerError(Exception):
    """Erro base do sistema de otimização"""


class InvalidBoardSpec(CutPlannerError, ValueError):
    """Especificação de chapa inválida (dimensões, kerf ou refilo)"""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class InvalidDemandItem(CutPlannerError, ValueError):
    """Item de demanda inválido (largura, altura ou quantidade)"""

    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(message)
        self.index = index
