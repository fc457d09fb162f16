"""
Pacote de rastreabilidade (traceability) do Atlas BuildFlow — Report v1.

Este pacote define o modelo canônico do relatório de execução produzido
pelo Runner.

API pública exposta:
    - PipelineReport      → agregado de uma run
    - PipelinePhaseRecord → registro de um Step executado
    - PipelineFailure     → descritor da primeira falha

Decisões arquiteturais:
    - O relatório é independente de engine, pipeline ou persistência
    - A estrutura é serializável e reprodutível (to_dict / from_dict)

Limites explícitos:
    - Não executa pipeline
    - Não realiza I/O
"""

from .report import (
    REPORT_SCHEMA_VERSION,
    PipelineFailure,
    PipelinePhaseRecord,
    PipelineReport,
)

__all__ = [
    "REPORT_SCHEMA_VERSION",
    "PipelineFailure",
    "PipelinePhaseRecord",
    "PipelineReport",
]
