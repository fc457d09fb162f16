# src/atlas_buildflow/core/pipeline/context.py
"""
Contexto de execução compartilhado do pipeline.

Este módulo define o `PipelineContext`, o registro tipado de dados de uma
run. Cada objeto de contexto é indexado pela sua identidade de tipo
concreto (`type(obj)`), de modo que existe no máximo uma instância viva por
tipo dentro de um mesmo registro.

O PipelineContext é o único meio permitido de:
    - troca indireta de informações entre Steps
    - armazenamento de dados produzidos por um Step e lidos por Steps posteriores

Princípios fundamentais:
    - Isolamento por execução (cada run possui seu próprio contexto)
    - Comunicação explícita: o tipo é a chave
    - Ausência de estado global compartilhado

Invariantes:
    - No máximo uma instância por tipo concreto
    - A busca é por tipo exato (uma subclasse não responde pela classe base)
    - Objetos recuperados são sempre instâncias do tipo pedido

Limites explícitos:
    - Não executa Steps
    - Não persiste dados
    - Não é thread-safe: o Runner executa os Steps sequencialmente numa única
      linha lógica de controle
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Optional, Type, TypeVar

from atlas_buildflow.core.exceptions import (
    ContextObjectNotFoundError,
    DuplicateContextObjectError,
)


T = TypeVar("T")


class ContextObject:
    """
    Marcador opcional para objetos de contexto.

    Qualquer valor pode ser armazenado no `PipelineContext`; herdar desta
    classe apenas documenta a intenção.
    """


class PipelineContext:
    """
    Registro de objetos de contexto indexado por tipo concreto.

    Exemplo:
        ctx = PipelineContext()
        ctx.set_unique(BuildEnvInfo(...))
        info = ctx.get(BuildEnvInfo)
    """

    def __init__(self) -> None:
        self._objects: Dict[type, Any] = {}

    # -----------------------------
    # Escrita
    # -----------------------------
    def set_unique(self, obj: Any) -> None:
        """Registra `obj`; falha se já existir instância do mesmo tipo concreto."""
        if obj is None:
            raise ValueError("context object must not be None")
        key = type(obj)
        if key in self._objects:
            raise DuplicateContextObjectError(key)
        self._objects[key] = obj

    def set_or_replace(self, obj: Any) -> None:
        if obj is None:
            raise ValueError("context object must not be None")
        self._objects[type(obj)] = obj

    def remove(self, cls: Type[T]) -> Optional[T]:
        return self._objects.pop(cls, None)

    def clear(self) -> None:
        self._objects.clear()

    # -----------------------------
    # Leitura
    # -----------------------------
    def try_get(self, cls: Type[T]) -> Optional[T]:
        obj = self._objects.get(cls)
        if obj is None:
            return None
        if not isinstance(obj, cls):
            # só ocorre se o dicionário interno for manipulado por fora
            raise TypeError(
                f"Context slot {cls.__qualname__} holds {type(obj).__qualname__}"
            )
        return obj

    def get(self, cls: Type[T]) -> T:
        obj = self.try_get(cls)
        if obj is None:
            raise ContextObjectNotFoundError(cls)
        return obj

    def has(self, cls: type) -> bool:
        return cls in self._objects

    def __contains__(self, cls: object) -> bool:
        return cls in self._objects

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[type]:
        return iter(list(self._objects))

    def __repr__(self) -> str:
        names = ", ".join(t.__qualname__ for t in self._objects)
        return f"PipelineContext([{names}])"
