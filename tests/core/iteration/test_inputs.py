# tests/core/iteration/test_inputs.py
"""
Testes da normalização de entradas do construto `for`.

Os testes asseguram que:
- sequências Python, numpy.ndarray e pandas.Series são aceitas por posição
- `Iter` e `Zip` produzem as visões posicionais esperadas
- coleções sem ordem e objetos não iteráveis são rejeitados
- geradores finitos são materializados uma única vez

Limites explícitos:
    - Não valida a execução do `for` (ver test_for_serial.py)
"""
import numpy as np
import pandas as pd
import pytest

try:
    from loom_dataflow.core.builders import Appender
    from loom_dataflow.core.exceptions import InvalidIterationInput
    from loom_dataflow.core.iteration import Iter, Zip, as_sequence, for_each
except Exception as e:  # noqa: BLE001
    Appender = None
    InvalidIterationInput = None
    Iter = None
    Zip = None
    as_sequence = None
    for_each = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing iteration inputs. Implement:"
            "- src/loom_dataflow/core/iteration/inputs.py (Iter, Zip, as_sequence)"
            f"Import error: {_IMPORT_ERR}"
        )


def _collect(data):
    return for_each(data, Appender(), lambda b, e: b.merge(e)).result()


def test_python_sequences_are_used_as_is():
    _require_imports()
    data = [1, 2, 3]
    assert as_sequence(data) is data
    assert _collect((1, 2)) == [1, 2]
    assert _collect(range(3)) == [0, 1, 2]
    assert _collect("ab") == ["a", "b"]


def test_numpy_array_is_positional():
    _require_imports()
    out = _collect(np.array([4, 5, 6]))
    assert [int(x) for x in out] == [4, 5, 6]


def test_pandas_series_is_accessed_by_position_not_label():
    """
    Verifica que uma Series com índice não trivial é lida por posição.

    Com rótulos [10, 20, 30], `s[0]` seria um KeyError; a visão posicional
    usa `.iloc` e respeita a ordem da Series.
    """
    _require_imports()
    s = pd.Series([7, 8, 9], index=[30, 10, 20])
    assert [int(x) for x in _collect(s)] == [7, 8, 9]


def test_generator_is_materialized():
    _require_imports()
    assert _collect(x * x for x in range(4)) == [0, 1, 4, 9]


@pytest.mark.parametrize("data", [{1, 2}, frozenset([1]), {"a": 1}])
def test_unordered_collections_are_rejected(data):
    _require_imports()
    with pytest.raises(InvalidIterationInput):
        as_sequence(data)


def test_non_iterable_is_rejected():
    _require_imports()
    with pytest.raises(InvalidIterationInput) as exc_info:
        as_sequence(42)
    assert exc_info.value.details["received"] == "int"


def test_iter_strided_subrange():
    _require_imports()
    assert list(Iter([1, 2, 3, 4], 0, 4, 2)) == [1, 3]
    assert list(Iter(range(10), 2, 9, 3)) == [2, 5, 8]
    assert len(Iter([1, 2, 3])) == 3


@pytest.mark.parametrize(
    "kwargs",
    [
        {"start": 0, "end": 5, "stride": 1},
        {"start": 3, "end": 2, "stride": 1},
        {"start": -1, "end": 2, "stride": 1},
        {"start": 0, "end": 2, "stride": 0},
        {"start": 0.5, "end": 2, "stride": 1},
    ],
)
def test_iter_rejects_invalid_bounds(kwargs):
    _require_imports()
    with pytest.raises(InvalidIterationInput):
        Iter([1, 2, 3, 4], **kwargs)


def test_zip_yields_tuples():
    _require_imports()
    z = Zip([1, 2], ["a", "b"])
    assert len(z) == 2
    assert list(z) == [(1, "a"), (2, "b")]


def test_zip_of_iter_and_list():
    """zip(iter([1,2,3,4], 0, 4, 2), [5, 6]) → elementos (1, 5) e (3, 6)."""
    _require_imports()
    assert list(Zip(Iter([1, 2, 3, 4], 0, 4, 2), [5, 6])) == [(1, 5), (3, 6)]


def test_zip_rejects_length_mismatch():
    _require_imports()
    with pytest.raises(InvalidIterationInput):
        Zip([1, 2, 3], [1, 2])


def test_zip_requires_inputs():
    _require_imports()
    with pytest.raises(InvalidIterationInput):
        Zip()
