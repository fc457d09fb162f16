# src/atlas_buildflow/core/config/hashing.py
"""
Hash canônico da configuração efetiva.

O hash identifica estruturalmente a configuração usada numa run. Quando a
configuração não fixa `logging.run_id`, `settings_from_config` usa o
prefixo do hash (`config_run_id`) como run_id dos logs.

Política (v1): JSON canônico (chaves ordenadas, separadores compactos,
UTF-8; valores não-JSON do YAML, como datas, viram texto) → SHA-256
hexadecimal (64 caracteres).
"""

import hashlib
import json
from typing import Any, Dict


RUN_ID_LENGTH = 12


def canonical_json(config: Dict[str, Any]) -> str:
    """Serialização estável: mesma estrutura → mesmo texto."""
    if not isinstance(config, dict):
        raise TypeError(f"Config to hash must be a dict, got: {type(config).__name__}")
    return json.dumps(
        config,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )


def compute_config_hash(config: Dict[str, Any]) -> str:
    """
    Gera o hash SHA-256 da configuração.

    Configurações estruturalmente equivalentes (mesmo conteúdo, ordem de
    chaves diferente) produzem o mesmo hash.

    Raises:
        TypeError: se `config` não for um dicionário.
    """
    digest = hashlib.sha256()
    digest.update(canonical_json(config).encode("utf-8"))
    return digest.hexdigest()


def config_run_id(config: Dict[str, Any]) -> str:
    """Prefixo do hash usado como run_id quando a configuração não define um."""
    return compute_config_hash(config)[:RUN_ID_LENGTH]
