"""
Atlas BuildFlow — Canonical Exceptions (v1)

Este módulo define as exceções tipadas do core do Atlas BuildFlow.

Objetivo:
- Permitir que Definition, Context e Steps levantem exceções semânticas tipadas
- Carregar `category` e `step_name` para o mapeamento determinístico em PipelineFailure
- Evitar ValueError/RuntimeError genéricos em erros estruturais do pipeline

Taxonomia:
- Erros de definição (abortam a run antes de qualquer Step):
  EmptyStepNameError, DuplicateStepNameError, UnknownDependencyError, CyclicDependencyError
- Erros de contexto (levantados de forma síncrona ao Step chamador):
  DuplicateContextObjectError, ContextObjectNotFoundError

Regras:
- Mensagens curtas e em texto livre; dados estruturados ficam em atributos.
- `str(exc)` é sempre a mensagem.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from .errors import CATEGORY_CONTEXT, CATEGORY_PIPELINE


class PipelineError(Exception):
    """Base class para exceções do pipeline.

    Steps podem levantar `PipelineError(message, category="build")` para
    declarar a própria categoria de falha; o Runner a copia para o
    PipelinePhaseRecord e para a falha de topo do relatório.
    """

    def __init__(
        self,
        message: str,
        *,
        step_name: Optional[str] = None,
        category: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.step_name = step_name or ""
        self.category = category or CATEGORY_PIPELINE

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Definição / Grafo
# ---------------------------------------------------------------------------

class EmptyStepNameError(PipelineError):
    """Step registrado com nome vazio (após trim)."""

    def __init__(self, step_type: str):
        super().__init__(f"Step {step_type} has an empty name")
        self.step_type = step_type


class DuplicateStepNameError(PipelineError):
    """
    Exceção levantada quando dois Steps compartilham o mesmo nome.

    A comparação é feita após trim e sem distinção de maiúsculas/minúsculas
    ("Build" e "build" colidem).
    """

    def __init__(self, name: str):
        super().__init__(
            f"Duplicate step name: {name}. Step names must be unique and stable",
            step_name=name,
        )
        self.name = name


class UnknownDependencyError(PipelineError):
    """Step declara dependência de um nome que não foi registrado."""

    def __init__(self, step_name: str, dependency: str):
        super().__init__(
            f"Step '{step_name}' depends on unknown step '{dependency}'",
            step_name=step_name,
        )
        self.dependency = dependency


class CyclicDependencyError(PipelineError):
    """
    Exceção levantada quando o grafo de dependências contém um ciclo.

    `step_names` lista, em ordem de registro, todos os Steps que nunca
    ficaram prontos durante a ordenação topológica. Inclui os Steps do
    ciclo e qualquer Step que dependa (direta ou indiretamente) deles.
    """

    def __init__(self, step_names: Iterable[str]):
        names: List[str] = list(step_names)
        super().__init__(
            f"Cycle detected in step dependency graph. Involved: {', '.join(names)}"
        )
        self.step_names = names


# ---------------------------------------------------------------------------
# Contexto
# ---------------------------------------------------------------------------

class ContextError(PipelineError):
    """Base para erros do registro de contexto."""

    def __init__(self, message: str):
        super().__init__(message, category=CATEGORY_CONTEXT)


class DuplicateContextObjectError(ContextError):
    """`set_unique` chamado para um tipo que já possui instância registrada."""

    def __init__(self, object_type: type):
        super().__init__(f"Context object {object_type.__qualname__} already exists")
        self.object_type = object_type


class ContextObjectNotFoundError(ContextError):
    """`get` chamado para um tipo sem instância registrada."""

    def __init__(self, object_type: type):
        super().__init__(f"Context object not found: {object_type.__qualname__}")
        self.object_type = object_type
