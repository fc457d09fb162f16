# src/atlas_buildflow/core/pipeline/types.py
"""
Tipos canônicos do grafo de pipeline do Atlas BuildFlow.

Componentes principais:
    - StepDescriptor → Step registrado na definição (nome, deps, fase, índice)
    - PlannedStep    → Step congelado dentro de um plano de execução
    - ExecutionPlan  → sequência imutável e ordenada de PlannedStep

Invariantes:
    - Tipos são imutáveis (frozen) depois de criados
    - Num ExecutionPlan, todo Step aparece depois de todas as suas dependências
    - O índice de inserção serve apenas para desempate determinístico

Limites explícitos:
    - Não executa Steps
    - Não ordena nem valida o grafo (ver `atlas_buildflow.core.engine.planner`)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .step import Step


@dataclass(frozen=True)
class StepDescriptor:
    """Registro interno de um Step na `PipelineDefinition`."""

    name: str
    step: Step
    depends_on: Tuple[str, ...]
    phase: Optional[str]
    index: int

    @property
    def key(self) -> str:
        return self.name.casefold()


@dataclass(frozen=True)
class PlannedStep:
    step_name: str
    step: Step
    phase: Optional[str] = None
    depends_on: Tuple[str, ...] = ()

    @property
    def record_name(self) -> str:
        """Nome usado no PipelinePhaseRecord: fase declarada ou nome do Step."""
        return self.phase or self.step_name


@dataclass(frozen=True)
class ExecutionPlan:
    """
    Plano de execução compilado a partir de uma `PipelineDefinition`.

    O plano não referencia a definição de origem e pode ser executado
    repetidamente contra contextos diferentes.
    """

    pipeline: str
    schema_version: int
    steps: Tuple[PlannedStep, ...]

    def __iter__(self) -> Iterator[PlannedStep]:
        return iter(self.steps)

    def __len__(self) -> int:
        return len(self.steps)

    def __getitem__(self, index: int) -> PlannedStep:
        return self.steps[index]

    @property
    def step_names(self) -> Tuple[str, ...]:
        return tuple(p.step_name for p in self.steps)
