# tests/core/builders/test_appender_linear_use.py
"""
Testes do ciclo de vida linear do Appender.

Este módulo valida que um handle de builder tem exatamente um dono ativo:
cada `merge` devolve um novo handle e invalida o anterior, e `result()`
encerra o ciclo de vida.

Os testes asseguram que:
- merge preserva a ordem de chamada
- o handle antigo fica CONSUMED após merge
- qualquer operação após `result()` levanta InvalidBuilderState
- o resultado materializado é independente do builder

Decisões arquiteturais:
    - Linearidade é verificada em runtime por uma tag de estado
    - Falhas de uso são estruturais (InvalidBuilderState), nunca silenciosas

Limites explícitos:
    - Não valida split/join (ver test_split_join.py)
    - Não valida tipos de elemento (ver test_placeholder_types.py)
"""
import pytest

try:
    from loom_dataflow.core.builders import Appender, BuilderState
    from loom_dataflow.core.exceptions import InvalidBuilderState
except Exception as e:  # noqa: BLE001
    Appender = None
    BuilderState = None
    InvalidBuilderState = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Falha imediatamente quando o contrato de builders não está disponível.

    Evita erros indiretos (NameError/AttributeError) durante os testes.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing builders. Implement:"
            "- src/loom_dataflow/core/builders/appender.py (Appender)"
            "- src/loom_dataflow/core/builders/types.py (BuilderState)"
            f"Import error: {_IMPORT_ERR}"
        )


def test_merge_preserves_call_order():
    """Os elementos finais são, em ordem, os elementos passados a merge."""
    _require_imports()
    b = Appender()
    for x in [3, 1, 2]:
        b = b.merge(x)
    assert b.result() == [3, 1, 2]


def test_new_appender_is_created_and_empty():
    _require_imports()
    b = Appender()
    assert b.state == BuilderState.CREATED
    assert b.result() == []


def test_merge_returns_new_handle_and_consumes_old():
    """
    Verifica a transferência de posse em `merge`.

    Invariantes:
        - O handle devolvido é outro objeto, no estado MERGED
        - O handle recebido passa a CONSUMED e rejeita novas operações
    """
    _require_imports()
    b0 = Appender()
    b1 = b0.merge(1)

    assert b1 is not b0
    assert b1.state == BuilderState.MERGED
    assert b0.state == BuilderState.CONSUMED

    with pytest.raises(InvalidBuilderState):
        b0.merge(2)
    with pytest.raises(InvalidBuilderState):
        b0.result()

    assert b1.result() == [1]


def test_merge_after_finalize_raises_invalid_builder_state():
    """
    Verifica que um builder finalizado não aceita merge.

    Este é o contrato de uso linear: após `result()` o handle é terminal,
    e a falha carrega o estado e a operação rejeitada em `details`.
    """
    _require_imports()
    b = Appender().merge(1)
    assert b.result() == [1]
    assert b.state == BuilderState.FINALIZED

    with pytest.raises(InvalidBuilderState) as exc_info:
        b.merge(2)

    assert exc_info.value.details["state"] == "finalized"
    assert exc_info.value.details["operation"] == "merge"
    assert exc_info.value.details["builder"] == "appender"


@pytest.mark.parametrize("op", ["result", "split"])
def test_other_operations_after_finalize_raise(op):
    _require_imports()
    b = Appender().merge("x")
    b.result()
    with pytest.raises(InvalidBuilderState):
        if op == "result":
            b.result()
        else:
            b.split(2)


def test_result_is_a_new_collection():
    """Mutar o resultado não afeta outro resultado nem o builder."""
    _require_imports()
    b = Appender().merge(1).merge(2)
    out = b.result()
    out.append(99)
    assert out == [1, 2, 99]


def test_none_is_a_regular_element():
    _require_imports()
    assert Appender().merge(None).merge(0).result() == [None, 0]
