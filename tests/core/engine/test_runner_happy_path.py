# tests/core/engine/test_runner_happy_path.py
"""
Testes do caminho feliz do PipelineRunner.

Valida que, num pipeline sem falhas:
- todos os Steps executam na ordem do plano
- cada Step executado produz exatamente um PipelinePhaseRecord de sucesso
- o relatório termina com success=True, exit_code=0 e timestamps preenchidos
- Steps se comunicam exclusivamente via PipelineContext
"""

from dataclasses import dataclass

import pytest

try:
    from atlas_buildflow.core.engine.runner import PipelineRunner, run_pipeline
    from atlas_buildflow.core.pipeline.definition import PipelineDefinition
    from atlas_buildflow.core.traceability.report import PipelineReport
except Exception as e:  # noqa: BLE001
    PipelineRunner = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing runner. Implement:\n"
            "- src/atlas_buildflow/core/engine/runner.py (PipelineRunner, run_pipeline)\n"
            f"Import error: {_IMPORT_ERR}"
        )


@dataclass
class BuildVersion:
    value: str


def test_runner_executes_all_steps_in_order(DummyStep, ctx, calls, pipeline_logger):
    _require_imports()

    definition = (
        PipelineDefinition("ci")
        .add_step(DummyStep("Test"), depends_on=["Build"])
        .add_step(DummyStep("Build"))
        .add_step(DummyStep("Publish"), depends_on=["Test"])
    )

    report = PipelineRunner(logger=pipeline_logger).run(definition, ctx)

    assert calls == ["Build", "Test", "Publish"]
    assert report.success is True
    assert report.exit_code == 0
    assert report.failure is None
    assert report.pipeline == "ci"
    assert report.step_names == ["Build", "Test", "Publish"]
    assert all(p.success for p in report.phases)
    assert report.started_at and report.ended_at
    assert report.duration_sec >= 0.0


def test_phase_records_are_complete(DummyStep, ctx):
    _require_imports()

    definition = PipelineDefinition().add_step(DummyStep("Build"), phase="compile")

    report = run_pipeline(definition, ctx)
    record = report.phases[0]

    assert record.name == "compile"
    assert record.step_name == "Build"
    assert record.started_at and record.ended_at
    assert record.duration_sec >= 0.0
    assert record.error_category is None
    assert record.error_message is None


def test_steps_share_data_through_context(DummyStep, ctx):
    """Um Step publica um objeto; o Step seguinte o lê por tipo."""
    _require_imports()

    seen = []

    definition = (
        PipelineDefinition()
        .add_step(DummyStep("Version", action=lambda c: c.set_unique(BuildVersion("1.2.3"))))
        .add_step(
            DummyStep("Tag", action=lambda c: seen.append(c.get(BuildVersion).value)),
            depends_on=["Version"],
        )
    )

    report = run_pipeline(definition, ctx)

    assert report.success is True
    assert seen == ["1.2.3"]
    assert ctx.get(BuildVersion).value == "1.2.3"


def test_should_run_sees_context_written_by_earlier_steps(DummyStep, ctx, calls):
    _require_imports()

    definition = (
        PipelineDefinition()
        .add_step(DummyStep("Version", action=lambda c: c.set_unique(BuildVersion("2.0.0"))))
        .add_step(
            DummyStep("Release", should_run=lambda c: c.try_get(BuildVersion) is not None),
            depends_on=["Version"],
        )
    )

    report = run_pipeline(definition, ctx)

    assert calls == ["Version", "Release"]
    assert report.step_names == ["Version", "Release"]


def test_empty_pipeline_succeeds(ctx):
    _require_imports()

    report = run_pipeline(PipelineDefinition(), ctx)

    assert report.success is True
    assert report.exit_code == 0
    assert report.phases == []


def test_caller_report_is_filled_and_returned(DummyStep, ctx):
    _require_imports()

    report = PipelineReport()
    out = run_pipeline(PipelineDefinition().add_step(DummyStep("Build")), ctx, report)

    assert out is report
    assert report.step_names == ["Build"]


def test_plan_can_run_multiple_times(DummyStep, calls):
    """A mesma definição executada duas vezes, com contextos distintos."""
    _require_imports()
    from atlas_buildflow.core.pipeline.context import PipelineContext

    definition = (
        PipelineDefinition()
        .add_step(DummyStep("B"), depends_on=["A"])
        .add_step(DummyStep("A"))
    )
    runner = PipelineRunner()

    first = runner.run(definition, PipelineContext())
    second = runner.run(definition, PipelineContext())

    assert calls == ["A", "B", "A", "B"]
    assert first.step_names == second.step_names == ["A", "B"]


def test_compiled_plan_runs_with_full_report_lifecycle(DummyStep, calls):
    """
    `run_plan` executa um plano já compilado com o mesmo ciclo de vida de `run`.

    Esperado:
        - cada execução reinicia e finaliza o relatório (ended_at, exit_code)
        - o plano é reutilizável contra contextos distintos
    """
    _require_imports()
    from atlas_buildflow.core.pipeline.context import PipelineContext

    plan = (
        PipelineDefinition("nightly")
        .add_step(DummyStep("Test", error=RuntimeError("flaky")), depends_on=["Build"])
        .add_step(DummyStep("Build"))
        .build_execution_plan()
    )
    runner = PipelineRunner()

    report = runner.run_plan(plan, PipelineContext())
    assert report.pipeline == "nightly"
    assert report.exit_code == 1
    assert report.failure.step_name == "Test"
    assert report.ended_at

    retry = PipelineReport()
    retry.phases = report.phases
    retry.failure = report.failure
    runner.run_plan(plan, PipelineContext(), retry)

    assert calls == ["Build", "Test", "Build", "Test"]
    assert retry.step_names == ["Build", "Test"]
    assert retry.failure.step_name == "Test"
    assert retry.started_at and retry.ended_at
    assert retry.duration_sec >= 0.0
    assert report.step_names == ["Build", "Test"]

    with pytest.raises(ValueError):
        runner.run_plan(None, PipelineContext())


def test_run_logs_step_scope(DummyStep, ctx, pipeline_logger, log_events):
    _require_imports()

    definition = PipelineDefinition("ci").add_step(DummyStep("Build"))

    PipelineRunner(logger=pipeline_logger).run(definition, ctx)

    messages = [(e["step"], e["message"]) for e in log_events]
    assert (None, "Pipeline start: ci (1 steps)") in messages
    assert ("Build", "Step start: Build") in messages
    assert ("Build", "Step done: Build") in messages
    assert messages[-1] == (None, "Pipeline succeeded: ci (exit_code=0)")
    assert pipeline_logger.current_scope is None
    assert all(e["run_id"] == "test-run" for e in log_events)


def test_none_arguments_raise_without_report(DummyStep, ctx):
    _require_imports()

    runner = PipelineRunner()

    with pytest.raises(ValueError):
        runner.run(None, ctx)
    with pytest.raises(ValueError):
        runner.run(PipelineDefinition().add_step(DummyStep("A")), None)
