"""Persistência do PipelineReport em JSON (v1).

O core não realiza I/O: o chamador (entry point de CI) decide onde salvar
o relatório devolvido pelo Runner e deriva o exit code do processo de
`report.exit_code`.

Decisões (v1):
- Formato: JSON UTF-8, indentado, com chaves ordenadas (determinístico)
- Diretórios intermediários são criados automaticamente
- `load_report` reconstrói via `PipelineReport.from_dict` (round-trip)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Union

from atlas_buildflow.core.traceability.report import PipelineReport


def save_report(report: Union[PipelineReport, Dict[str, Any]], path: Union[str, Path]) -> Path:
    """Salva o relatório em `path` e retorna o caminho escrito.

    Raises:
        OSError: falha ao criar diretórios ou escrever o arquivo.
    """
    data = report.to_dict() if isinstance(report, PipelineReport) else report
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True), encoding="utf-8")
    return target


def load_report(path: Union[str, Path]) -> PipelineReport:
    """Carrega um relatório salvo por `save_report`.

    Raises:
        OSError: falha de leitura.
        json.JSONDecodeError: conteúdo inválido.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return PipelineReport.from_dict(data)
