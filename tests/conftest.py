# tests/conftest.py
"""
Fixtures compartilhados para testes do Atlas BuildFlow.

Este módulo define fixtures reutilizáveis que fornecem:
- Steps dummy duck-typed com comportamento controlado
- um PipelineContext novo por teste
- um PipelineLogger isolado que coleta eventos em memória
- YAMLs de configuração semelhantes ao uso real do projeto

Decisões arquiteturais:
    - Steps dummy utilizam duck typing em vez de herança
    - Cada execução de Step é registrada numa lista compartilhada (`calls`),
      permitindo asserts sobre ordem e fail-fast
    - Imports do core são realizados de forma lazy para falhas mais claras

Invariantes:
    - Nenhuma fixture executa pipeline real
    - Nenhuma fixture realiza I/O
    - Fixtures são isoladas entre testes
"""

import logging

import pytest


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    YAML de defaults semelhante a um `config.defaults.yaml` real.

    Returns:
        str: conteúdo YAML (base completa e estável).
    """
    return """\
logging:
  run_id: ci-local
  enable_console: true
  enable_file: false
  level: INFO
steps:
  CollectBuildEnv:
    enabled: true
  Package:
    enabled: true
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """YAML de overrides locais (apenas chaves que mudam)."""
    return """\
logging:
  level: DEBUG
steps:
  Package:
    enabled: false
"""


# =====================================================
# Pipeline fixtures (Step + PipelineContext + logger)
# =====================================================

@pytest.fixture
def calls() -> list:
    """Lista compartilhada onde os Steps dummy registram sua execução."""
    return []


@pytest.fixture
def DummyStep(calls):
    """
    Fixture factory que fornece uma implementação duck-typed de Step.

    Retorna uma *classe* (não uma instância). Cada instância:
    - expõe `name`, `description` e `is_enabled`
    - responde `should_run(ctx)` com o valor (ou callable) informado
    - em `run(ctx)` anexa o próprio nome em `calls` e então levanta `error`
      (quando informado) ou executa `action(ctx)` (quando informado)

    Invariantes:
        - Não executa I/O
        - Não depende de config

    Returns:
        type: classe _DummyStep.
    """

    class _DummyStep:
        def __init__(
            self,
            name: str = "Step",
            *,
            description: str = "dummy step",
            enabled: bool = True,
            should_run=True,
            error: Exception = None,
            action=None,
        ):
            self.name = name
            self.description = description
            self.is_enabled = enabled
            self._should_run = should_run
            self._error = error
            self._action = action

        def should_run(self, ctx) -> bool:
            if callable(self._should_run):
                return self._should_run(ctx)
            return self._should_run

        def run(self, ctx) -> None:
            calls.append(self.name)
            if self._error is not None:
                raise self._error
            if self._action is not None:
                self._action(ctx)

        def __repr__(self) -> str:
            return f"DummyStep({self.name!r})"

    return _DummyStep


@pytest.fixture
def ctx():
    """PipelineContext vazio e exclusivo do teste."""
    from atlas_buildflow.core.pipeline.context import PipelineContext

    return PipelineContext()


@pytest.fixture
def log_events() -> list:
    return []


@pytest.fixture
def pipeline_logger(log_events):
    """
    PipelineLogger isolado (logger stdlib próprio, sem handlers) com um
    listener que acumula os eventos emitidos em `log_events`.
    """
    from atlas_buildflow.core.logger import PipelineLogger

    std_logger = logging.getLogger("atlas_buildflow.tests")
    logger = PipelineLogger(run_id="test-run", logger=std_logger)
    logger.add_listener(log_events.append)
    return logger
