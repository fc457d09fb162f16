# src/atlas_buildflow/core/pipeline/definition.py
"""
Definição mutável de um pipeline (Steps + dependências + fases).

Este módulo define a `PipelineDefinition`, responsável por acumular Steps
e validar sua integridade estrutural no momento do registro, antes que o
plano de execução seja compilado.

Responsabilidades do módulo:
    - Validar nome não vazio e unicidade (sem distinção de maiúsculas)
    - Normalizar dependências (trim, vazios descartados, sem duplicatas)
    - Atribuir o índice de inserção usado no desempate da ordenação
    - Compilar o `ExecutionPlan` via planner

Decisões arquiteturais:
    - A ordem de chamada de `add_step` afeta apenas o desempate, nunca a correção
    - Dependências são resolvidas apenas na compilação (podem ser declaradas
      antes de o Step referenciado existir)

Limites explícitos:
    - Não executa pipeline
    - Não interage com PipelineContext
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple, Union

from atlas_buildflow.core.engine.planner import plan_execution
from atlas_buildflow.core.exceptions import DuplicateStepNameError, EmptyStepNameError

from .step import Step
from .types import ExecutionPlan, StepDescriptor


DEFAULT_PIPELINE_NAME = "pipeline"


def _normalize_dependencies(depends_on: Union[str, Iterable[str], None]) -> Tuple[str, ...]:
    if depends_on is None:
        return ()
    if isinstance(depends_on, str):
        depends_on = [depends_on]

    seen = set()
    deps: List[str] = []
    for raw in depends_on:
        if raw is None:
            continue
        dep = str(raw).strip()
        if not dep or dep.casefold() in seen:
            continue
        seen.add(dep.casefold())
        deps.append(dep)
    return tuple(deps)


class PipelineDefinition:
    """
    Builder de pipeline: acumula Steps e compila um plano determinístico.

    Exemplo:
        definition = (
            PipelineDefinition("release")
            .add_step(CollectBuildEnvStep())
            .add_step(BuildStep(), depends_on=["CollectBuildEnv"], phase="build")
        )
        plan = definition.build_execution_plan()
    """

    def __init__(self, name: Optional[str] = None, schema_version: int = 1):
        self.name = name.strip() if name and name.strip() else DEFAULT_PIPELINE_NAME
        self.schema_version = schema_version
        self._descriptors: List[StepDescriptor] = []
        self._by_key: Dict[str, StepDescriptor] = {}

    def add_step(
        self,
        step: Step,
        depends_on: Union[str, Iterable[str], None] = None,
        phase: Optional[str] = None,
    ) -> "PipelineDefinition":
        """
        Registra um Step.

        Args:
            step: implementação do contrato de Step.
            depends_on: nomes dos Steps que precisam executar antes deste.
            phase: rótulo opcional usado como nome do PipelinePhaseRecord.

        Raises:
            ValueError: se `step` for None.
            EmptyStepNameError: se o nome do Step for vazio após trim.
            DuplicateStepNameError: se o nome já existir (sem distinção de maiúsculas).
        """
        if step is None:
            raise ValueError("step must not be None")

        raw_name = getattr(step, "name", None)
        if not isinstance(raw_name, str) or not raw_name.strip():
            raise EmptyStepNameError(type(step).__name__)

        name = raw_name.strip()
        key = name.casefold()
        if key in self._by_key:
            raise DuplicateStepNameError(name)

        descriptor = StepDescriptor(
            name=name,
            step=step,
            depends_on=_normalize_dependencies(depends_on),
            phase=phase.strip() if phase and phase.strip() else None,
            index=len(self._descriptors),
        )
        self._descriptors.append(descriptor)
        self._by_key[key] = descriptor
        return self

    def build_execution_plan(self) -> ExecutionPlan:
        """
        Compila a definição num `ExecutionPlan`.

        Função pura da definição: compilar duas vezes a mesma definição não
        modificada produz planos com a mesma ordem.

        Raises:
            UnknownDependencyError: dependência declarada não registrada.
            CyclicDependencyError: o grafo de dependências contém ciclo.
        """
        return plan_execution(
            tuple(self._descriptors),
            pipeline=self.name,
            schema_version=self.schema_version,
        )

    @property
    def steps(self) -> List[str]:
        """Nomes registrados, em ordem de inserção."""
        return [d.name for d in self._descriptors]

    def dependencies_of(self, name: str) -> Tuple[str, ...]:
        return self._by_key[name.strip().casefold()].depends_on

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip().casefold() in self._by_key

    def __repr__(self) -> str:
        return f"PipelineDefinition(name={self.name!r}, steps={self.steps!r})"
