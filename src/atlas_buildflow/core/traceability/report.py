# src/atlas_buildflow/core/traceability/report.py
"""
Report v1 — rastro estruturado de uma execução de pipeline.

Este módulo define o modelo de dados do relatório produzido pelo Runner:

    - PipelinePhaseRecord → resultado e tempo de UM Step executado
    - PipelineFailure     → descritor da PRIMEIRA falha da run
    - PipelineReport      → agregado (sucesso, exit code, tempos, fases, falha)

Princípios fundamentais:
    - Apenas Steps efetivamente executados geram PipelinePhaseRecord
    - A ordem de `phases` reflete a ordem real de execução
    - Timestamps são strings ISO 8601 em UTC
    - O relatório é serializável e reconstruível (round-trip via dict)

Decisões arquiteturais:
    - UTC é o timezone canônico para todos os timestamps
    - Durações são expressas em segundos (float, nunca negativas)
    - `failure` é None enquanto a run não falhou

Invariantes:
    - `exit_code` é 0 se e somente se `success` é verdadeiro (após finalização)
    - Uma falha registrada nunca é sobrescrita por falhas posteriores

Limites explícitos:
    - Não executa pipeline
    - Não persiste em disco (ver `atlas_buildflow.persistence.report_store`)
    - Não decide políticas de execução (fail-fast, skip)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


REPORT_SCHEMA_VERSION = "1.0.0"


def _ensure_tzaware_utc(dt: datetime) -> datetime:
    """Normaliza um timestamp para timezone-aware em UTC (naive é assumido UTC)."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def iso_timestamp(dt: datetime) -> str:
    return _ensure_tzaware_utc(dt).isoformat()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def seconds_between(start: datetime, end: datetime) -> float:
    """
    Calcula a duração em segundos entre dois timestamps.

    Ambos são normalizados para UTC antes do cálculo. O valor retornado é
    sempre não negativo, protegendo contra ajustes de relógio.
    """
    s = _ensure_tzaware_utc(start)
    e = _ensure_tzaware_utc(end)
    return max(0.0, (e - s).total_seconds())


@dataclass
class PipelinePhaseRecord:
    """
    Registro de execução de um Step.

    Campos:
        - name: rótulo de fase (phase) declarado no `add_step`, ou o nome do Step
        - step_name: nome canônico do Step
        - started_at / ended_at: ISO 8601 UTC
        - duration_sec: tempo medido com relógio monotônico
        - success: resultado do Step
        - error_category / error_message / error_trace: preenchidos apenas em falha
    """

    name: str
    step_name: str
    started_at: str = ""
    ended_at: str = ""
    duration_sec: float = 0.0
    success: bool = True
    error_category: Optional[str] = None
    error_message: Optional[str] = None
    error_trace: Optional[str] = None

    def mark_failed(self, failure: "PipelineFailure") -> None:
        self.success = False
        self.error_category = failure.category
        self.error_message = failure.message
        self.error_trace = failure.trace

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "step_name": self.step_name,
            "started_at": self.started_at,
            "ended_at": self.ended_at,
            "duration_sec": self.duration_sec,
            "success": self.success,
            "error_category": self.error_category,
            "error_message": self.error_message,
            "error_trace": self.error_trace,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PipelinePhaseRecord":
        return cls(
            name=data.get("name", ""),
            step_name=data.get("step_name", ""),
            started_at=data.get("started_at", ""),
            ended_at=data.get("ended_at", ""),
            duration_sec=float(data.get("duration_sec", 0.0) or 0.0),
            success=bool(data.get("success", True)),
            error_category=data.get("error_category"),
            error_message=data.get("error_message"),
            error_trace=data.get("error_trace"),
        )


@dataclass(frozen=True)
class PipelineFailure:
    """Descritor imutável da primeira falha de uma run."""

    category: str
    message: str
    trace: str = ""
    step_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "message": self.message,
            "trace": self.trace,
            "step_name": self.step_name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PipelineFailure":
        return cls(
            category=data.get("category", ""),
            message=data.get("message", ""),
            trace=data.get("trace", "") or "",
            step_name=data.get("step_name", "") or "",
        )


@dataclass
class PipelineReport:
    """
    Relatório agregado de uma execução de pipeline (Report v1).

    O Runner é o único dono do relatório durante a execução; ao final ele
    é entregue ao chamador, que decide como persistir e qual exit code usar
    para o processo (`exit_code`).

    Decisões arquiteturais:
        - O relatório começa otimista (`success=True`)
        - `mark_failed` registra apenas a primeira falha
        - `finalize` é idempotente quanto ao exit code (derivado de `success`)
    """

    schema_version: str = REPORT_SCHEMA_VERSION
    pipeline: str = ""
    success: bool = True
    exit_code: int = 0
    started_at: str = ""
    ended_at: str = ""
    duration_sec: float = 0.0
    phases: List[PipelinePhaseRecord] = field(default_factory=list)
    failure: Optional[PipelineFailure] = None

    def mark_failed(self, failure: PipelineFailure) -> None:
        self.success = False
        self.exit_code = 1
        if self.failure is None:
            self.failure = failure

    def add_phase(self, record: PipelinePhaseRecord) -> None:
        self.phases.append(record)

    def finalize(self, *, started: datetime, ended: datetime) -> None:
        self.ended_at = iso_timestamp(ended)
        self.duration_sec = seconds_between(started, ended)
        self.exit_code = 0 if self.success else 1

    @property
    def failed_phase(self) -> Optional[PipelinePhaseRecord]:
        for record in self.phases:
            if not record.success:
                return record
        return None

    @property
    def step_names(self) -> List[str]:
        """Nomes dos Steps executados, na ordem de execução."""
        return [p.step_name for p in self.phases]

    def to_dict(self) -> Dict[str, Any]:
        """
        Converte o relatório para um dicionário serializável em JSON.

        O dicionário retornado é independente do estado interno: alterações
        nele não afetam o relatório em memória.
        """
        return {
            "schema_version": self.schema_version,
            "pipeline": self.pipeline,
            "success": self.success,
            "exit_code": self.exit_code,
            "started_at": self.started_at,
            "ended_at": self.ended_at,
            "duration_sec": self.duration_sec,
            "phases": [p.to_dict() for p in self.phases],
            "failure": self.failure.to_dict() if self.failure is not None else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PipelineReport":
        failure = data.get("failure")
        return cls(
            schema_version=data.get("schema_version", REPORT_SCHEMA_VERSION),
            pipeline=data.get("pipeline", ""),
            success=bool(data.get("success", True)),
            exit_code=int(data.get("exit_code", 0)),
            started_at=data.get("started_at", ""),
            ended_at=data.get("ended_at", ""),
            duration_sec=float(data.get("duration_sec", 0.0) or 0.0),
            phases=[PipelinePhaseRecord.from_dict(p) for p in (data.get("phases", []) or [])],
            failure=PipelineFailure.from_dict(failure) if failure else None,
        )
