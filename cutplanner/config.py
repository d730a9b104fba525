"""
Configuração do CutPlanner carregada de variáveis de ambiente
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configurações padrão do otimizador"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CUTPLANNER_",
        extra="ignore",
    )

    default_kerf: float = Field(default=3.0, gt=0, description="Espessura padrão da serra (mm)")
    usage_limit: float = Field(
        default=80.0, ge=0, le=100,
        description="Aproveitamento (%) a partir do qual a chapa conta como inteira"
    )
    strip_tolerance: float = Field(
        default=1.0, gt=0,
        description="Tolerância (mm) para agrupar peças na mesma faixa"
    )
    log_level: str = Field(default="INFO", description="Nível de log")


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Retorna a instância global de configurações"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure(settings: Optional[Settings]) -> None:
    """Substitui as configurações globais (None volta a ler do ambiente)"""
    global _settings
    _settings = settings
