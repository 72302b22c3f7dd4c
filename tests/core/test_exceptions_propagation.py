# tests/core/test_exceptions_propagation.py
"""
Testes de propagação das exceções tipadas do Loom.

Os testes asseguram que:
- toda exceção do Loom atravessa um `@contextmanager` sem ser trocada
  por outra (o runtime atribui `__traceback__` ao repassá-la)
- o `__cause__` de UserFunctionError é preservado na travessia
- exceções continuam hashable (usáveis em sets e como chave)

Decisões arquiteturais:
    - Cada erro é produzido pela operação pública que o levanta, não
      instanciado diretamente
"""
from contextlib import contextmanager

import pytest

try:
    from loom_dataflow import ops
    from loom_dataflow.core.builders import Appender
    from loom_dataflow.core.exceptions import (
        InvalidBuilderState,
        InvalidIterationInput,
        LoomException,
        TypeInferenceError,
        UserFunctionError,
    )
    from loom_dataflow.core.iteration import for_each
except Exception as e:  # noqa: BLE001
    ops = None
    Appender = None
    InvalidBuilderState = None
    InvalidIterationInput = None
    LoomException = None
    TypeInferenceError = None
    UserFunctionError = None
    for_each = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing typed exceptions. Implement:"
            "- src/loom_dataflow/core/exceptions.py (LoomException e subclasses)"
            f"Import error: {_IMPORT_ERR}"
        )


@contextmanager
def _scope():
    yield


def _merge_after_result():
    b = Appender()
    b.result()
    b.merge(1)


def _divide_by_zero():
    ops.map([1, 0], lambda x: 1 // x)


def _wrong_elem_type():
    Appender(elem_type=int).merge("x")


def _unordered_input():
    for_each({1, 2}, Appender(), lambda b, e: b.merge(e))


@pytest.mark.parametrize(
    "trigger, exc_type",
    [
        (_merge_after_result, "InvalidBuilderState"),
        (_divide_by_zero, "UserFunctionError"),
        (_wrong_elem_type, "TypeInferenceError"),
        (_unordered_input, "InvalidIterationInput"),
    ],
    ids=["builder-state", "user-function", "type-inference", "iteration-input"],
)
def test_loom_exceptions_cross_contextmanager(trigger, exc_type):
    _require_imports()
    expected = globals()[exc_type]
    with pytest.raises(expected) as exc_info:
        with _scope():
            trigger()
    assert isinstance(exc_info.value, LoomException)
    assert exc_info.value.__traceback__ is not None


def test_user_function_error_keeps_cause_across_contextmanager():
    _require_imports()
    with pytest.raises(UserFunctionError) as exc_info:
        with _scope():
            _divide_by_zero()
    assert exc_info.value.details["index"] == 1
    assert isinstance(exc_info.value.__cause__, ZeroDivisionError)


def test_loom_exceptions_are_hashable():
    _require_imports()
    with pytest.raises(InvalidBuilderState) as exc_info:
        _merge_after_result()
    exc = exc_info.value
    assert exc in {exc}
