# src/atlas_buildflow/core/engine/planner.py
"""
Planejador de execução do pipeline (DAG).

Este módulo é responsável por validar a estrutura do pipeline e produzir
uma ordem de execução topológica determinística dos Steps registrados
numa `PipelineDefinition`.

O planner opera exclusivamente em nível estrutural, analisando:
    - dependências declaradas (resolvidas sem distinção de maiúsculas)
    - formação de ciclos

Decisões arquiteturais:
    - Utiliza ordenação topológica determinística (Kahn modificado)
    - Empates são resolvidos pelo índice de inserção: entre Steps prontos
      ao mesmo tempo, o registrado primeiro executa primeiro
    - A regra de desempate independe da forma como as dependências foram declaradas
    - Erros estruturais são tratados como falhas fatais

Invariantes:
    - Nenhum Step aparece antes de suas dependências
    - Todos os Steps aparecem exatamente uma vez
    - A mesma definição produz sempre a mesma ordem

Limites explícitos:
    - Não executa Steps
    - Não interage com PipelineContext
    - Não decide políticas de execução
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from atlas_buildflow.core.exceptions import CyclicDependencyError, UnknownDependencyError
from atlas_buildflow.core.pipeline.types import ExecutionPlan, PlannedStep, StepDescriptor


def validate_dependencies(descriptors: Sequence[StepDescriptor]) -> None:
    """
    Garante que toda dependência declarada corresponde a um Step registrado.

    Raises:
        UnknownDependencyError: nomeando o Step dependente e o nome ausente.
    """
    known = {d.key for d in descriptors}
    for d in descriptors:
        for dep in d.depends_on:
            if dep.casefold() not in known:
                raise UnknownDependencyError(d.name, dep)


def topological_order(descriptors: Sequence[StepDescriptor]) -> List[StepDescriptor]:
    """
    Ordena os descritores por Kahn, desempatando pelo índice de inserção.

    O conjunto de prontos é mantido ordenado por índice; a cada iteração o
    menor índice é removido e anexado ao resultado, e cada dependente cujo
    grau de entrada chega a zero entra no conjunto de prontos.

    Raises:
        CyclicDependencyError: nomeando todo Step que nunca ficou pronto.
    """
    by_key: Dict[str, StepDescriptor] = {d.key: d for d in descriptors}

    incoming_count: Dict[str, int] = {d.key: 0 for d in descriptors}
    outgoing: Dict[str, List[str]] = {d.key: [] for d in descriptors}

    for d in descriptors:
        for dep in d.depends_on:
            incoming_count[d.key] += 1
            outgoing[dep.casefold()].append(d.key)

    ready: List[StepDescriptor] = sorted(
        (d for d in descriptors if incoming_count[d.key] == 0),
        key=lambda d: d.index,
    )
    order: List[StepDescriptor] = []

    while ready:
        current = ready.pop(0)  # menor índice de inserção
        order.append(current)
        for child in outgoing[current.key]:
            incoming_count[child] -= 1
            if incoming_count[child] == 0:
                # insere mantendo o conjunto ordenado para determinismo
                ready.append(by_key[child])
                ready.sort(key=lambda d: d.index)

    if len(order) != len(descriptors):
        scheduled = {d.key for d in order}
        raise CyclicDependencyError(d.name for d in descriptors if d.key not in scheduled)

    return order


def plan_execution(
    descriptors: Sequence[StepDescriptor],
    *,
    pipeline: str = "pipeline",
    schema_version: int = 1,
) -> ExecutionPlan:
    """
    Valida e compila os descritores num `ExecutionPlan` imutável.

    Fases:
        1. validação de dependências (`validate_dependencies`)
        2. ordenação topológica determinística (`topological_order`)

    Args:
        descriptors: Steps registrados, em ordem de inserção.
        pipeline: nome do pipeline de origem.
        schema_version: versão do schema da definição.

    Returns:
        ExecutionPlan: plano independente da definição de origem.

    Raises:
        UnknownDependencyError: dependência declarada inexistente.
        CyclicDependencyError: o grafo contém ciclo.
    """
    validate_dependencies(descriptors)
    ordered = topological_order(descriptors)
    return ExecutionPlan(
        pipeline=pipeline,
        schema_version=schema_version,
        steps=tuple(
            PlannedStep(
                step_name=d.name,
                step=d.step,
                phase=d.phase,
                depends_on=d.depends_on,
            )
            for d in ordered
        ),
    )
