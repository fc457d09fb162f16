# src/atlas_buildflow/core/config/merge.py
"""
Deep-merge determinístico de configuração.

Política de merge (v1):
    - dict + dict       → merge recursivo por chave
    - list              → substituída inteira pelo override
    - escalar           → substituído pelo override
    - conflito de tipos → ConfigTypeConflictError com o caminho pontuado
                          da chave (ex.: `steps.Package.enabled`)

O merge é puramente funcional: nenhum dos inputs é mutado e o resultado
não compartilha referências com eles.
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def _key_path(parent: str, key: Any) -> str:
    return f"{parent}.{key}" if parent else str(key)


def _merge_value(path: str, current: Any, incoming: Any) -> Any:
    if isinstance(current, dict) and isinstance(incoming, dict):
        return _merge_mapping(path, current, incoming)
    if isinstance(incoming, list) or type(current) is type(incoming):
        return deepcopy(incoming)
    raise ConfigTypeConflictError(
        f"Type conflict on key '{path}': "
        f"{type(current).__name__} vs {type(incoming).__name__}"
    )


def _merge_mapping(path: str, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = {key: deepcopy(value) for key, value in base.items()}
    for key, incoming in override.items():
        if key in merged:
            merged[key] = _merge_value(_key_path(path, key), merged[key], incoming)
        else:
            merged[key] = deepcopy(incoming)
    return merged


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combina `base` (defaults) com `override` (configuração local).

    Args:
        base: configuração base.
        override: overrides explícitos; vencem sempre que compatíveis.

    Returns:
        Dict[str, Any]: novo dicionário resultante.

    Raises:
        ConfigTypeConflictError: se as raízes não forem dicts ou se uma
            chave tiver tipos incompatíveis entre base e override.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            "Deep-merge requires dicts at the root, got: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )
    return _merge_mapping("", base, override)
