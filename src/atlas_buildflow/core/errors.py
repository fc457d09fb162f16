"""
Atlas BuildFlow — Canonical Error Structures (v1)

Este módulo define o catálogo canônico de categorias de falha e o
mapeamento de exceções para o descritor serializável `PipelineFailure`.

Falhas são artefatos de execução e fazem parte do contrato do relatório,
devendo ser:

- explícitas
- serializáveis
- rastreáveis (incluem stack trace formatado)

Nenhuma exceção de Step é relançada ao chamador: ela é sempre convertida
por `failure_from_exception`.
"""

from __future__ import annotations

import traceback
from typing import Optional

from atlas_buildflow.core.traceability.report import PipelineFailure


# ---------------------------------------------------------------------------
# Catálogo canônico de categorias (v1)
# ---------------------------------------------------------------------------

# Falha de definição/compilação do plano (nenhum Step executado)
CATEGORY_PIPELINE = "pipeline"

# Falha genérica levantada dentro de um Step
CATEGORY_EXCEPTION = "exception"

# Falha de acesso ao registro de contexto
CATEGORY_CONTEXT = "context"


def exception_category(exc: BaseException, default: str = CATEGORY_EXCEPTION) -> str:
    """Retorna a categoria própria da exceção, ou `default` quando ausente/vazia."""
    category = getattr(exc, "category", None)
    if isinstance(category, str) and category.strip():
        return category
    return default


def exception_message(exc: BaseException) -> str:
    # exceções sem mensagem ainda precisam de algo legível no relatório
    return str(exc) or exc.__class__.__name__


def format_trace(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def failure_from_exception(
    exc: BaseException,
    *,
    category: Optional[str] = None,
    default_category: str = CATEGORY_EXCEPTION,
    step_name: Optional[str] = None,
) -> PipelineFailure:
    """
    Converte uma exceção em `PipelineFailure`.

    Regras:
    - category: `category` explícito quando informado; senão o atributo
      `category` da exceção quando presente e não vazio; senão `default_category`.
    - message: `str(exc)`, ou o nome da classe quando a mensagem é vazia.
    - trace: traceback completo formatado.
    - step_name: o Step em execução (vazio para falhas de compilação).
    """
    return PipelineFailure(
        category=category or exception_category(exc, default_category),
        message=exception_message(exc),
        trace=format_trace(exc),
        step_name=step_name or "",
    )
