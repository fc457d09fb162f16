# src/atlas_buildflow/core/pipeline/step.py
"""
Contrato canônico de Step do Atlas BuildFlow.

Este módulo define o protocolo formal que qualquer Step deve satisfazer
para ser registrado numa `PipelineDefinition` e executado pelo Runner.

Um Step é a menor unidade executável do pipeline e representa uma
operação autocontida, responsável apenas por sua própria lógica.

Responsabilidades de um Step:
    - expor um `name` estável (chave do grafo, correlação de log e do relatório)
    - decidir, em tempo de execução, se precisa rodar (`should_run`)
    - executar sua lógica interagindo exclusivamente via PipelineContext

Princípios fundamentais:
    - Steps não conhecem o Runner nem o planner
    - Steps não controlam ordem de execução
    - Falha é sinalizada apenas levantando exceção (não há retorno de status)
    - Conformidade é garantida por duck typing (@runtime_checkable)

Limites explícitos:
    - Não contém lógica de planejamento
    - Não define políticas de execução (fail-fast, skip)
    - Não registra Phase Records
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .context import PipelineContext


@runtime_checkable
class Step(Protocol):
    """
    Contrato canônico de um Step.

    Atributos obrigatórios:
        - name: identificador não vazio e estável entre chamadas
        - description: informativo, sem efeito na execução
        - is_enabled: chave estática; quando falsa o Step é pulado sem registro

    Métodos:
        - should_run(ctx): predicado dinâmico avaliado imediatamente antes da
          execução, depois que Steps anteriores já puderam alterar o contexto
        - run(ctx): executa o trabalho; qualquer exceção é tratada como falha

    Decisões arquiteturais:
        - O protocolo não impõe herança, apenas conformidade estrutural
        - `is_enabled` (autoria) e `should_run` (dados da run) são distintos
    """

    name: str
    description: str
    is_enabled: bool

    def should_run(self, ctx: PipelineContext) -> bool:
        ...

    def run(self, ctx: PipelineContext) -> None:
        ...


class StepBase:
    """
    Implementação base com defaults, para reduzir boilerplate em Steps concretos.

    Defaults:
        - name: nome da classe
        - description: vazio
        - is_enabled: True
        - should_run: sempre True

    Subclasses precisam apenas implementar `run`.
    """

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def description(self) -> str:
        return ""

    @property
    def is_enabled(self) -> bool:
        return True

    def should_run(self, ctx: PipelineContext) -> bool:
        return True

    def run(self, ctx: PipelineContext) -> None:
        raise NotImplementedError(f"{type(self).__name__}.run is not implemented")
