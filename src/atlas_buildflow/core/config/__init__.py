# src/atlas_buildflow/core/config/__init__.py
"""
Camada de configuração do Atlas BuildFlow.

Responsabilidades do pacote:
    - Carregar defaults + overrides locais (YAML ou JSON)
    - Resolver a configuração final via deep-merge determinístico
    - Gerar hash canônico para rastreabilidade
    - Interpretar a configuração em settings tipados (Runner e logging)

Princípios fundamentais:
    - Configuração é declarativa e explícita
    - Nenhuma heurística implícita durante o merge
    - A mesma entrada sempre produz a mesma configuração final

Limites explícitos:
    - Não executa pipeline
    - Não conhece Steps concretos
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    InvalidSettingsError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash, config_run_id
from .loader import load_config
from .merge import deep_merge
from .settings import LoggingSettings, RunSettings, load_settings, settings_from_config

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "InvalidSettingsError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "config_run_id",
    "load_config",
    "deep_merge",
    "LoggingSettings",
    "RunSettings",
    "load_settings",
    "settings_from_config",
]
