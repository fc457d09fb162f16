# src/atlas_buildflow/core/engine/runner.py
"""
Runner de execução do pipeline do Atlas BuildFlow.

Fluxo de uma run:
    1. Definição (ou plano) ou contexto ausentes → ValueError imediato
       (sem relatório)
    2. Marca `started_at` e assume sucesso
    3. Compila o ExecutionPlan (somente em `run`)
    4. Itera o plano em ordem:
         - Step desabilitado (is_enabled ou settings) → log + skip, sem registro
         - should_run(ctx) falso → log + skip, sem registro
         - senão executa `run(ctx)` dentro do escopo de log do Step
           - sucesso → PipelinePhaseRecord de sucesso, segue
           - exceção → registro de falha, falha de topo do relatório e
             interrupção de TODOS os Steps restantes (fail-fast)
    5. Finaliza sempre: `ended_at`, `duration_sec`, `exit_code` (0/1)

Decisões arquiteturais:
    - Apenas `step.run(ctx)` é protegido pelo bloco de falha do Step.
      Qualquer outra exceção levantada durante a run (compilação do plano,
      `should_run`, colaborador de logging) é capturada no nível da run e
      vira falha de topo com categoria "pipeline", sem registro de fase e
      sem nome de Step.
    - Em falha de Step, registro e relatório são atualizados ANTES do log:
      um sink de log com defeito não apaga o que já foi apurado.

Nenhuma exceção (além do ValueError de argumentos) é relançada ao
chamador: tudo fica capturado no PipelineReport devolvido.

Limites explícitos:
    - Execução estritamente sequencial (sem paralelismo entre ramos do DAG)
    - Sem retry, timeout ou cancelamento
    - Não persiste o relatório
"""

from __future__ import annotations

import time
from typing import Callable, Optional

from atlas_buildflow.core.config.settings import RunSettings
from atlas_buildflow.core.errors import CATEGORY_PIPELINE, failure_from_exception
from atlas_buildflow.core.logger import PipelineLogger
from atlas_buildflow.core.pipeline.context import PipelineContext
from atlas_buildflow.core.pipeline.definition import PipelineDefinition
from atlas_buildflow.core.pipeline.types import ExecutionPlan, PlannedStep
from atlas_buildflow.core.traceability.report import (
    PipelinePhaseRecord,
    PipelineReport,
    iso_timestamp,
    utc_now,
)


class PipelineRunner:
    """Executor sequencial fail-fast de pipelines."""

    def __init__(
        self,
        *,
        logger: Optional[PipelineLogger] = None,
        settings: Optional[RunSettings] = None,
    ):
        self.logger = logger or PipelineLogger()
        self.settings = settings or RunSettings()

    def _is_enabled(self, planned: PlannedStep) -> bool:
        if not bool(getattr(planned.step, "is_enabled", True)):
            return False
        return not self.settings.is_step_disabled(planned.step_name)

    @staticmethod
    def _open_record(planned: PlannedStep) -> PipelinePhaseRecord:
        return PipelinePhaseRecord(
            name=planned.record_name,
            step_name=planned.step_name,
            started_at=iso_timestamp(utc_now()),
        )

    @staticmethod
    def _close_record(record: PipelinePhaseRecord, started: float) -> PipelinePhaseRecord:
        record.ended_at = iso_timestamp(utc_now())
        record.duration_sec = max(0.0, time.perf_counter() - started)
        return record

    def _fail_step(
        self,
        report: PipelineReport,
        record: PipelinePhaseRecord,
        exc: Exception,
        started: float,
    ) -> None:
        failure = failure_from_exception(exc, step_name=record.step_name)
        record.mark_failed(failure)
        report.mark_failed(failure)
        report.add_phase(self._close_record(record, started))
        self.logger.exception(exc, f"Step failed: {record.step_name}")

    def _fail_pipeline(self, report: PipelineReport, exc: Exception) -> None:
        report.mark_failed(failure_from_exception(exc, category=CATEGORY_PIPELINE))
        self._log_guarded(report, self.logger.exception, exc, "Pipeline failed")

    @staticmethod
    def _log_guarded(report: PipelineReport, emit: Callable[..., None], *args) -> None:
        """Loga fora do bloco protegido da run; erro do sink vira falha "pipeline"."""
        try:
            emit(*args)
        except Exception as exc:
            report.mark_failed(failure_from_exception(exc, category=CATEGORY_PIPELINE))

    def _run_step(self, planned: PlannedStep, ctx: PipelineContext, report: PipelineReport) -> bool:
        """Executa um Step planejado. Retorna False quando a run deve parar."""
        step = planned.step
        name = planned.step_name

        if not self._is_enabled(planned):
            self.logger.info(f"Skip step (disabled): {name}")
            return True

        should_run = getattr(step, "should_run", None)
        if should_run is not None and not bool(should_run(ctx)):
            self.logger.info(f"Skip step (should_run=false): {name}")
            return True

        with self.logger.scope(name):
            self.logger.info(f"Step start: {name}")
            record = self._open_record(planned)
            started = time.perf_counter()
            try:
                step.run(ctx)
            except Exception as exc:
                self._fail_step(report, record, exc, started)
                return False

            report.add_phase(self._close_record(record, started))
            self.logger.info(f"Step done: {name}")
        return True

    def _execute_plan(self, plan: ExecutionPlan, ctx: PipelineContext, report: PipelineReport) -> None:
        self.logger.info(f"Pipeline start: {plan.pipeline} ({len(plan)} steps)")
        for planned in plan:
            if not self._run_step(planned, ctx, report):
                break

    def _run(
        self,
        pipeline: str,
        compile_plan: Callable[[], ExecutionPlan],
        ctx: PipelineContext,
        report: Optional[PipelineReport],
    ) -> PipelineReport:
        report = report if report is not None else PipelineReport()

        started = utc_now()
        report.started_at = iso_timestamp(started)
        report.pipeline = pipeline
        report.success = True
        report.exit_code = 0
        report.failure = None
        report.phases = []

        try:
            self._execute_plan(compile_plan(), ctx, report)
        except Exception as exc:
            self._fail_pipeline(report, exc)
        finally:
            report.finalize(started=started, ended=utc_now())

        self._log_guarded(
            report,
            self.logger.info,
            f"Pipeline {'succeeded' if report.success else 'failed'}: "
            f"{report.pipeline} (exit_code={report.exit_code})",
        )
        return report

    def run(
        self,
        definition: PipelineDefinition,
        ctx: PipelineContext,
        report: Optional[PipelineReport] = None,
    ) -> PipelineReport:
        """
        Compila e executa `definition` contra `ctx`.

        Args:
            definition: definição do pipeline.
            ctx: registro de contexto compartilhado por todos os Steps.
            report: relatório a preencher; um novo é criado quando omitido.

        Returns:
            PipelineReport: sempre, em sucesso ou falha.

        Raises:
            ValueError: somente se `definition` ou `ctx` forem None.
        """
        if definition is None:
            raise ValueError("definition must not be None")
        if ctx is None:
            raise ValueError("ctx must not be None")
        return self._run(definition.name, definition.build_execution_plan, ctx, report)

    def run_plan(
        self,
        plan: ExecutionPlan,
        ctx: PipelineContext,
        report: Optional[PipelineReport] = None,
    ) -> PipelineReport:
        """
        Executa um ExecutionPlan já compilado contra `ctx`.

        Mesmo ciclo de vida de `run` (reset, carimbos de tempo, finalize),
        sem a etapa de compilação. Um plano pode ser executado repetidamente
        contra contextos diferentes.
        """
        if plan is None:
            raise ValueError("plan must not be None")
        if ctx is None:
            raise ValueError("ctx must not be None")
        return self._run(plan.pipeline, lambda: plan, ctx, report)


def run_pipeline(
    definition: PipelineDefinition,
    ctx: PipelineContext,
    report: Optional[PipelineReport] = None,
    *,
    logger: Optional[PipelineLogger] = None,
    settings: Optional[RunSettings] = None,
) -> PipelineReport:
    """Atalho para `PipelineRunner(logger=..., settings=...).run(...)`."""
    return PipelineRunner(logger=logger, settings=settings).run(definition, ctx, report)
