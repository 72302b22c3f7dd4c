# src/loom_dataflow/ops/operations.py
"""
Operações map, filter e flatten.

Cada operação é uma composição fixa de um Appender com o construto `for`:

    map(data, func)    = result(for(data, appender, |b, e| merge(b, func(e))))
    filter(data, func) = result(for(data, appender, |b, e| if func(e) then merge(b, e) else b))
    flatten(data)      = result(for(data, appender[?], |b, e| for(e, b, |b2, x| merge(b2, x))))

Os nomes `map` e `filter` sombreiam os builtins dentro deste módulo; os
builtins não são usados aqui.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, TypeVar

from ..core.builders import PLACEHOLDER, Appender
from ..core.iteration import for_each
from ..core.run_context import RunContext


T = TypeVar("T")
U = TypeVar("U")


def map(  # noqa: A001
    data: Any,
    func: Callable[[T], U],
    *,
    ctx: Optional[RunContext] = None,
) -> List[U]:
    """
    Aplica `func` a cada elemento, preservando ordem e tamanho.

    `func` é chamada exatamente uma vez por elemento; em modo paralelo a
    ordem de avaliação entre elementos não é garantida, mas a ordem do
    resultado é.

    Examples
    --------
    >>> map([1, 2, 3], lambda x: x * 2)
    [2, 4, 6]
    """
    return for_each(data, Appender(), lambda b, e: b.merge(func(e)), ctx=ctx).result()


def filter(  # noqa: A001
    data: Any,
    func: Callable[[T], Any],
    *,
    ctx: Optional[RunContext] = None,
) -> List[T]:
    """
    Mantém, em ordem, os elementos para os quais `func` é verdadeira.

    Examples
    --------
    >>> filter([1, 2, 3, 4], lambda x: x % 2 == 0)
    [2, 4]
    """
    return for_each(
        data,
        Appender(),
        lambda b, e: b.merge(e) if func(e) else b,
        ctx=ctx,
    ).result()


def flatten(
    data: Any,
    *,
    elem_type: Any = PLACEHOLDER,
    ctx: Optional[RunContext] = None,
) -> List[Any]:
    """
    Concatena, em ordem, as coleções internas de `data`.

    O `for` interno recebe o mesmo builder do `for` externo, de modo que um
    único appender acumula todos os elementos. O tipo de elemento do
    appender é diferido (`PLACEHOLDER`) e não é verificado em runtime;
    apenas um `elem_type` explícito é checado com isinstance.

    Examples
    --------
    >>> flatten([[1, 2], [], [3]])
    [1, 2, 3]
    """

    def outer(b, inner):
        return for_each(inner, b, lambda b2, x: b2.merge(x))

    return for_each(data, Appender(elem_type=elem_type), outer, ctx=ctx).result()
