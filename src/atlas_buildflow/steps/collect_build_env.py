"""Step canônico: CollectBuildEnv (v1).

Responsabilidades:
- Coletar um snapshot do ambiente de build (interpretador, SO, máquina, CPU,
  diretório de trabalho e argumentos de linha de comando).
- Publicar o snapshot no PipelineContext como `BuildEnvInfo`
  (`set_or_replace`: uma nova coleta substitui a anterior).
- Registrar uma linha-resumo no logger, quando fornecido.

Princípios:
- OBSERVAR sem mutar: o Step não altera o ambiente.
- Campos que não puderem ser obtidos ficam vazios, sem falhar o Step.

Limites explícitos (v1):
- NÃO coleta variáveis de ambiente (risco de vazar segredos de CI).
- NÃO consulta ferramentas externas (compiladores, VCS).
"""

from __future__ import annotations

import os
import platform
import socket
import sys
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from atlas_buildflow.core.logger import PipelineLogger
from atlas_buildflow.core.pipeline.context import ContextObject, PipelineContext
from atlas_buildflow.core.pipeline.step import StepBase
from atlas_buildflow.core.traceability.report import iso_timestamp, utc_now


@dataclass
class BuildEnvInfo(ContextObject):
    """Snapshot do ambiente de build publicado no contexto."""

    collected_at_utc: str
    python_version: str
    python_implementation: str
    executable: str
    os: str
    os_release: str
    platform: str
    machine: str
    cpu: str
    cpu_count: int
    hostname: str
    cwd: str
    command_line_args: List[str] = field(default_factory=list)

    def summary(self) -> str:
        return (
            f"[BuildEnv] Python={self.python_implementation} {self.python_version}, "
            f"OS={self.os} {self.os_release}, Machine={self.machine}, CPUs={self.cpu_count}"
        )


def _best_effort(getter: Callable[[], str]) -> str:
    try:
        return getter() or ""
    except OSError:
        return ""


def collect_build_env(argv: Optional[Sequence[str]] = None) -> BuildEnvInfo:
    """Coleta o snapshot do ambiente corrente."""
    return BuildEnvInfo(
        collected_at_utc=iso_timestamp(utc_now()),
        python_version=platform.python_version(),
        python_implementation=platform.python_implementation(),
        executable=sys.executable or "",
        os=platform.system(),
        os_release=platform.release(),
        platform=platform.platform(),
        machine=platform.machine(),
        cpu=platform.processor(),
        cpu_count=os.cpu_count() or 0,
        hostname=_best_effort(socket.gethostname),
        cwd=_best_effort(os.getcwd),
        command_line_args=list(sys.argv if argv is None else argv),
    )


class CollectBuildEnvStep(StepBase):
    """Publica `BuildEnvInfo` no contexto."""

    name = "CollectBuildEnv"
    description = "Collect interpreter/OS/machine/command-line environment snapshot."

    def __init__(self, *, logger: Optional[PipelineLogger] = None, argv: Optional[Sequence[str]] = None):
        self.logger = logger
        self.argv = argv

    def run(self, ctx: PipelineContext) -> None:
        info = collect_build_env(self.argv)
        ctx.set_or_replace(info)
        if self.logger is not None:
            self.logger.info(info.summary())
