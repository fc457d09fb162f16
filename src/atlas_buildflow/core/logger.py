# src/atlas_buildflow/core/logger.py
"""
Logger do pipeline (colaborador de logging do Runner).

Este módulo define o `PipelineLogger`, a fachada usada pelo Runner e pelos
Steps para registrar linhas informativas correlacionadas com a run e com o
Step em execução, sobre o `logging` da biblioteca padrão.

Formato de linha: `[run_id][scope] mensagem` (partes vazias são omitidas).

Decisões arquiteturais:
    - O escopo corrente (nome do Step) é um campo da instância, definido pelo
      Runner antes de cada Step e restaurado depois (`scope`), nunca estado
      global ou thread-local
    - Cada linha também é entregue como evento estruturado aos listeners
      registrados (run_id, step, level, message, timestamp)
    - O logger do pacote recebe um NullHandler na importação: sem
      configure_logging nenhuma linha é impressa (nem ERROR via lastResort)

Limites explícitos:
    - Não decide políticas de execução
    - Não persiste relatórios
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional

from atlas_buildflow.core.config.settings import LoggingSettings


LOGGER_NAME = "atlas_buildflow"
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

LogListener = Callable[[Dict[str, Any]], None]

# marca os handlers instalados por configure_logging
_HANDLER_FLAG = "_atlas_buildflow_handler"

# biblioteca: sem configure_logging, nada chega ao lastResort do logging
logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())


class PipelineLogger:
    """Fachada de logging com run_id, escopo explícito e listeners de eventos."""

    def __init__(self, run_id: str = "", logger: Optional[logging.Logger] = None):
        self.run_id = run_id or ""
        self._logger = logger or logging.getLogger(LOGGER_NAME)
        self._scope: Optional[str] = None
        self._listeners: List[LogListener] = []
        self._emitting = False

    @property
    def current_scope(self) -> Optional[str]:
        return self._scope

    @contextmanager
    def scope(self, name: Optional[str]) -> Iterator["PipelineLogger"]:
        """Define o escopo corrente durante o bloco e restaura o anterior ao sair."""
        previous = self._scope
        self._scope = name
        try:
            yield self
        finally:
            self._scope = previous

    def add_listener(self, listener: LogListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: LogListener) -> None:
        self._listeners.remove(listener)

    def format_line(self, message: str) -> str:
        prefix = ""
        if self.run_id:
            prefix += f"[{self.run_id}]"
        if self._scope:
            prefix += f"[{self._scope}]"
        return f"{prefix} {message}" if prefix else message

    # -----------------------------
    # Emissão
    # -----------------------------
    def debug(self, message: str) -> None:
        self._emit(logging.DEBUG, message)

    def info(self, message: str) -> None:
        self._emit(logging.INFO, message)

    def warning(self, message: str) -> None:
        self._emit(logging.WARNING, message)

    def error(self, message: str) -> None:
        self._emit(logging.ERROR, message)

    def exception(self, exc: BaseException, message: Optional[str] = None) -> None:
        head = message or "Exception"
        self._emit(
            logging.ERROR,
            f"{head}: {type(exc).__name__}: {exc}",
            exc_info=(type(exc), exc, exc.__traceback__),
        )

    def _emit(self, level: int, message: str, exc_info: Any = None) -> None:
        self._logger.log(
            level,
            self.format_line(message),
            exc_info=exc_info,
            extra={"run_id": self.run_id, "scope": self._scope or ""},
        )

        # listener que loga de novo não reentra
        if not self._listeners or self._emitting:
            return

        event = {
            "run_id": self.run_id,
            "step": self._scope,
            "level": logging.getLevelName(level),
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        self._emitting = True
        try:
            for listener in list(self._listeners):
                listener(event)
        finally:
            self._emitting = False


def configure_logging(settings: Optional[LoggingSettings] = None) -> logging.Logger:
    """
    Instala os handlers de console e/ou arquivo no logger do pacote.

    Chamadas repetidas substituem os handlers instalados anteriormente por
    esta função; handlers adicionados por terceiros são preservados.

    Returns:
        logging.Logger: o logger `atlas_buildflow` configurado.
    """
    settings = settings or LoggingSettings()
    logger = logging.getLogger(LOGGER_NAME)
    shutdown_logging()

    formatter = logging.Formatter(LOG_FORMAT)
    handlers: List[logging.Handler] = []

    if settings.enable_console:
        handlers.append(logging.StreamHandler())

    if settings.enable_file:
        path = Path(settings.log_file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, mode="a", encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_FLAG, True)
        logger.addHandler(handler)

    logger.setLevel(settings.level)
    return logger


def shutdown_logging() -> None:
    """Remove e fecha os handlers instalados por `configure_logging`."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_FLAG, False):
            logger.removeHandler(handler)
            handler.close()


def logger_from_settings(settings: LoggingSettings) -> PipelineLogger:
    """Configura os handlers e retorna um PipelineLogger com o run_id dos settings."""
    return PipelineLogger(run_id=settings.run_id, logger=configure_logging(settings))
