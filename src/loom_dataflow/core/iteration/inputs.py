# src/loom_dataflow/core/iteration/inputs.py
"""
Normalização das entradas do construto `for`.

O construto `for` opera sobre coleções finitas e ordenadas, acessadas por
posição. Este módulo converte as entradas aceitas em uma visão posicional
uniforme (`len(seq)` + `seq[i]`):

    - sequências Python (list, tuple, str, range, bytes)
    - objetos com `__len__` e `__getitem__` posicional (ex.: numpy.ndarray)
    - objetos com `.iloc` (ex.: pandas.Series), acessados por posição
    - `Iter(data, start, end, stride)`: sub-faixa com passo
    - `Zip(a, b, ...)`: elementos como tuplas, entradas de mesmo tamanho
    - demais iteráveis finitos, materializados uma única vez

Decisões arquiteturais:
    - Coleções sem ordem (set, frozenset, mapas) são rejeitadas
    - Nenhuma entrada é copiada quando já é posicional

Limites explícitos:
    - Não detecta iteráveis infinitos
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence, Set
from typing import Any, Tuple

from ..errors import invalid_iteration_input


class _PositionalView:
    """Acesso posicional (`.iloc`) a objetos rotulados, como pandas.Series."""

    __slots__ = ("_obj",)

    def __init__(self, obj: Any) -> None:
        self._obj = obj

    def __len__(self) -> int:
        return len(self._obj)

    def __getitem__(self, i: int) -> Any:
        return self._obj.iloc[i]


def as_sequence(data: Any) -> Any:
    """
    Retorna uma visão posicional de `data`.

    Raises:
        InvalidIterationInput: Se `data` for sem ordem ou não iterável.
    """
    if isinstance(data, (Iter, Zip, _PositionalView)):
        return data
    if isinstance(data, (Set, Mapping)):
        raise invalid_iteration_input(
            reason="coleção sem ordem definida",
            received=type(data).__name__,
        )
    if hasattr(data, "iloc"):
        return _PositionalView(data)
    if isinstance(data, Sequence):
        return data
    if hasattr(data, "__len__") and hasattr(data, "__getitem__"):
        return data
    if isinstance(data, Iterable):
        return list(data)
    raise invalid_iteration_input(
        reason="objeto não iterável",
        received=type(data).__name__,
    )


def _check_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise invalid_iteration_input(
            reason=f"{name} deve ser inteiro",
            received=type(value).__name__,
        )
    return value


class Iter:
    """
    Sub-faixa com passo de uma coleção: `iter(data, start, end, stride)`.

    Visita os índices `start, start + stride, ...` menores que `end`.

    Examples
    --------
    >>> list(Iter([1, 2, 3, 4], 0, 4, 2))
    [1, 3]
    """

    def __init__(self, data: Any, start: int = 0, end: int | None = None, stride: int = 1) -> None:
        seq = as_sequence(data)
        length = len(seq)
        start = _check_int("start", start)
        end = length if end is None else _check_int("end", end)
        stride = _check_int("stride", stride)

        if stride < 1:
            raise invalid_iteration_input(reason="stride deve ser >= 1", received=str(stride))
        if not 0 <= start <= end <= length:
            raise invalid_iteration_input(
                reason="faixa fora dos limites da coleção",
                received=f"[{start}, {end})",
                length=length,
            )

        self._seq = seq
        self._range = range(start, end, stride)

    def __len__(self) -> int:
        return len(self._range)

    def __getitem__(self, i: int) -> Any:
        return self._seq[self._range[i]]

    def __iter__(self):
        for i in self._range:
            yield self._seq[i]

    def __repr__(self) -> str:
        r = self._range
        return f"Iter(start={r.start}, end={r.stop}, stride={r.step})"


class Zip:
    """
    Iteração conjunta de várias coleções; o elemento `i` é a tupla dos
    elementos `i` de cada entrada. Todas as entradas devem ter o mesmo tamanho.
    """

    def __init__(self, *inputs: Any) -> None:
        if not inputs:
            raise invalid_iteration_input(reason="zip requer ao menos uma entrada")
        seqs = tuple(as_sequence(x) for x in inputs)
        lengths = [len(s) for s in seqs]
        if len(set(lengths)) != 1:
            raise invalid_iteration_input(
                reason="entradas de zip com tamanhos diferentes",
                received=str(lengths),
            )
        self._seqs = seqs
        self._length = lengths[0]

    def __len__(self) -> int:
        return self._length

    def __getitem__(self, i: int) -> Tuple[Any, ...]:
        return tuple(s[i] for s in self._seqs)

    def __iter__(self):
        for i in range(self._length):
            yield self[i]

    def __repr__(self) -> str:
        return f"Zip(inputs={len(self._seqs)}, length={self._length})"
