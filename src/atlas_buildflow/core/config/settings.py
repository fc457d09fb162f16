# src/atlas_buildflow/core/config/settings.py
"""
Settings tipados derivados da configuração resolvida.

A configuração carregada por `load_config` é um dict livre; este módulo a
interpreta em estruturas explícitas e imutáveis consumidas pelo Runner e
pelo logger. Não há binding dinâmico nem introspecção: cada chave suportada
é lida e validada explicitamente.

Chaves suportadas (v1):

    logging:
      run_id: "ci-1234"
      enable_console: true
      enable_file: true
      log_file_path: build/logs/pipeline.log
      level: INFO
    steps:
      <step name>:
        enabled: false

Decisões arquiteturais:
    - `steps.<nome>.enabled: false` desabilita o Step da mesma forma que
      `is_enabled == False` (pulado, sem PipelinePhaseRecord)
    - Nomes de Steps são comparados sem distinção de maiúsculas
    - Chaves desconhecidas são ignoradas; tipos inválidos são erro
    - Sem `logging.run_id`, o run_id é o prefixo do hash da configuração:
      a mesma configuração produz sempre o mesmo run_id
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Mapping, Optional

from .errors import InvalidSettingsError
from .hashing import config_run_id
from .loader import PathLike, load_config


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class LoggingSettings:
    run_id: str = ""
    enable_console: bool = True
    enable_file: bool = False
    log_file_path: str = "build/logs/pipeline.log"
    level: str = "INFO"


@dataclass(frozen=True)
class RunSettings:
    """Settings de uma run: Steps desabilitados por configuração e logging."""

    disabled_steps: FrozenSet[str] = field(default_factory=frozenset)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    def is_step_disabled(self, name: str) -> bool:
        return name.strip().casefold() in self.disabled_steps


def _section(config: Mapping[str, Any], key: str) -> Dict[str, Any]:
    value = config.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise InvalidSettingsError(f"'{key}' must be a mapping, got: {type(value).__name__}")
    return value


def _typed(section: Mapping[str, Any], key: str, expected: type, default: Any, where: str) -> Any:
    if key not in section or section[key] is None:
        return default
    value = section[key]
    # bool é subclasse de int; aqui o tipo precisa ser exato
    if type(value) is not expected:
        raise InvalidSettingsError(
            f"'{where}.{key}' must be {expected.__name__}, got: {type(value).__name__}"
        )
    return value


def _logging_settings(config: Mapping[str, Any]) -> LoggingSettings:
    section = _section(config, "logging")
    defaults = LoggingSettings()

    level = _typed(section, "level", str, defaults.level, "logging").upper()
    if level not in LOG_LEVELS:
        raise InvalidSettingsError(
            f"'logging.level' must be one of {', '.join(LOG_LEVELS)}, got: {level}"
        )

    run_id = _typed(section, "run_id", str, defaults.run_id, "logging")
    if not run_id:
        run_id = config_run_id(dict(config))

    return LoggingSettings(
        run_id=run_id,
        enable_console=_typed(section, "enable_console", bool, defaults.enable_console, "logging"),
        enable_file=_typed(section, "enable_file", bool, defaults.enable_file, "logging"),
        log_file_path=_typed(section, "log_file_path", str, defaults.log_file_path, "logging"),
        level=level,
    )


def _disabled_steps(config: Mapping[str, Any]) -> FrozenSet[str]:
    disabled = set()
    for name, step_cfg in _section(config, "steps").items():
        if step_cfg is None:
            continue
        if not isinstance(step_cfg, dict):
            raise InvalidSettingsError(
                f"'steps.{name}' must be a mapping, got: {type(step_cfg).__name__}"
            )
        if not _typed(step_cfg, "enabled", bool, True, f"steps.{name}"):
            disabled.add(str(name).strip().casefold())
    return frozenset(disabled)


def settings_from_config(config: Optional[Mapping[str, Any]]) -> RunSettings:
    """
    Interpreta a configuração resolvida em `RunSettings`.

    Raises:
        InvalidSettingsError: se alguma chave suportada tiver tipo inválido.
    """
    config = config or {}
    return RunSettings(
        disabled_steps=_disabled_steps(config),
        logging=_logging_settings(config),
    )


def load_settings(
    *,
    defaults_path: PathLike,
    local_path: Optional[PathLike] = None,
) -> RunSettings:
    """Atalho: `load_config` seguido de `settings_from_config`."""
    return settings_from_config(load_config(defaults_path=defaults_path, local_path=local_path))
