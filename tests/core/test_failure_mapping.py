# tests/core/test_failure_mapping.py
"""
Testes da conversão exceção → PipelineFailure (core/errors.py).
"""

import pytest

try:
    from atlas_buildflow.core.errors import (
        CATEGORY_EXCEPTION,
        CATEGORY_PIPELINE,
        exception_category,
        failure_from_exception,
    )
    from atlas_buildflow.core.exceptions import CyclicDependencyError, PipelineError
except Exception as e:  # noqa: BLE001
    failure_from_exception = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing errors module. Implement:\n"
            "- src/atlas_buildflow/core/errors.py (failure_from_exception)\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _raised(exc):
    try:
        raise exc
    except Exception as caught:  # noqa: BLE001
        return caught


class BlankCategoryError(Exception):
    category = "   "


def test_plain_exception_defaults_to_exception_category():
    _require_imports()

    failure = failure_from_exception(_raised(OSError("disk full")), step_name="Package")

    assert failure.category == CATEGORY_EXCEPTION
    assert failure.message == "disk full"
    assert failure.step_name == "Package"
    assert "OSError: disk full" in failure.trace


def test_pipeline_errors_carry_their_category():
    _require_imports()

    exc = CyclicDependencyError(["X", "Y"])

    assert exception_category(exc) == CATEGORY_PIPELINE
    assert failure_from_exception(exc).category == CATEGORY_PIPELINE


def test_explicit_category_wins():
    _require_imports()

    exc = PipelineError("custom", category="signing")

    assert failure_from_exception(exc).category == "signing"
    assert failure_from_exception(exc, category=CATEGORY_PIPELINE).category == CATEGORY_PIPELINE


def test_blank_category_attribute_is_ignored():
    _require_imports()

    assert exception_category(BlankCategoryError()) == CATEGORY_EXCEPTION
    assert failure_from_exception(BlankCategoryError()).message == "BlankCategoryError"
