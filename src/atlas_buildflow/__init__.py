"""
Atlas BuildFlow — engine determinístico de orquestração de Steps para build/CI.

O chamador registra Steps nomeados com dependências declaradas numa
`PipelineDefinition`; o `PipelineRunner` deriva uma ordem de execução
determinística, executa os Steps sequencialmente contra um
`PipelineContext` compartilhado e devolve um `PipelineReport`.

Arquitetura em alto nível:
    - core.pipeline     → Step, PipelineContext, PipelineDefinition
    - core.engine       → planner (Kahn estável) e runner (fail-fast)
    - core.traceability → PipelineReport / PipelinePhaseRecord
    - persistence       → save/load do relatório em JSON
    - steps             → Steps concretos (ex.: CollectBuildEnv)
"""

from .core.engine.runner import PipelineRunner, run_pipeline
from .core.exceptions import (
    ContextObjectNotFoundError,
    CyclicDependencyError,
    DuplicateContextObjectError,
    DuplicateStepNameError,
    EmptyStepNameError,
    PipelineError,
    UnknownDependencyError,
)
from .core.logger import PipelineLogger, configure_logging
from .core.pipeline.context import ContextObject, PipelineContext
from .core.pipeline.definition import PipelineDefinition
from .core.pipeline.step import Step, StepBase
from .core.pipeline.types import ExecutionPlan, PlannedStep
from .core.traceability.report import PipelineFailure, PipelinePhaseRecord, PipelineReport

__version__ = "0.1.0"

__all__ = [
    "PipelineRunner",
    "run_pipeline",
    "ContextObjectNotFoundError",
    "CyclicDependencyError",
    "DuplicateContextObjectError",
    "DuplicateStepNameError",
    "EmptyStepNameError",
    "PipelineError",
    "UnknownDependencyError",
    "PipelineLogger",
    "configure_logging",
    "ContextObject",
    "PipelineContext",
    "PipelineDefinition",
    "Step",
    "StepBase",
    "ExecutionPlan",
    "PlannedStep",
    "PipelineFailure",
    "PipelinePhaseRecord",
    "PipelineReport",
]
