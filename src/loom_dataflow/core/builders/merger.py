# src/loom_dataflow/core/builders/merger.py
"""
Builders de redução: Merger (`merger[T, op]`) e DictMerger (`dictmerger[K, V, op]`).

Ambos combinam valores com um operador binário **associativo**. A ordem
de aplicação é sempre a ordem de índice (esquerda para direita), de modo
que operadores não comutativos continuam corretos sob split/join.

Operadores nomeados (v1):
    - "+"   → soma (identidade 0)
    - "*"   → produto (identidade 1)
    - "min" → mínimo (sem identidade)
    - "max" → máximo (sem identidade)

Qualquer callable binário também é aceito; nesse caso a identidade é
opcional e só é usada como resultado de um Merger vazio.
"""

from __future__ import annotations

import operator
from typing import Any, Callable, Dict, Hashable, Optional, Tuple, Union

from ..errors import type_inference_error
from .base import BaseBuilder, T


_OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    "+": operator.add,
    "*": operator.mul,
    "min": min,
    "max": max,
}

_IDENTITIES: Dict[str, Any] = {
    "+": 0,
    "*": 1,
}

# Marcador interno de acumulador vazio (distinto de None, que é um valor válido).
_EMPTY = object()
_NO_IDENTITY = object()

BinaryOp = Union[str, Callable[[Any, Any], Any]]


def _resolve_op(op: BinaryOp) -> Tuple[Callable[[Any, Any], Any], Any]:
    if isinstance(op, str):
        if op not in _OPERATORS:
            raise ValueError(f"Unknown merge operator: {op!r} (expected one of {sorted(_OPERATORS)})")
        return _OPERATORS[op], _IDENTITIES.get(op, _NO_IDENTITY)
    if callable(op):
        return op, _NO_IDENTITY
    raise TypeError(f"Merge operator must be a str or callable, got {type(op).__name__}")


class Merger(BaseBuilder[T, T]):
    """
    Reduz todos os valores recebidos a um único valor.

    Partes criadas por `split` começam vazias (não com a identidade), e
    `join` combina apenas partes não vazias, na ordem das partes.

    `result()` de um Merger vazio retorna a identidade; sem identidade
    conhecida, levanta ValueError (como `min([])`).
    """

    kind = "merger"

    def __init__(self, op: BinaryOp = "+", identity: Any = _NO_IDENTITY) -> None:
        super().__init__()
        self.op_name = op if isinstance(op, str) else getattr(op, "__name__", repr(op))
        self._op, default_identity = _resolve_op(op)
        self._raw_op = op
        self.identity = default_identity if identity is _NO_IDENTITY else identity
        self._acc: Any = _EMPTY

    def _combine(self, left: Any, right: Any) -> Any:
        if left is _EMPTY:
            return right
        if right is _EMPTY:
            return left
        return self._op(left, right)

    def _accept(self, value: T) -> None:
        self._acc = self._combine(self._acc, value)

    def _absorb(self, other: "Merger[T]") -> None:
        self._acc = self._combine(self._acc, other._acc)

    def _materialize(self) -> T:
        if self._acc is not _EMPTY:
            return self._acc
        if self.identity is _NO_IDENTITY:
            raise ValueError(f"Empty merger with operator {self.op_name!r} has no identity")
        return self.identity

    def _release(self) -> None:
        self._acc = _EMPTY

    def _fresh(self) -> "Merger[T]":
        return type(self)(op=self._raw_op, identity=self.identity)

    def _compatible(self, other: "Merger[T]") -> bool:
        return other._raw_op == self._raw_op and (
            other.identity is self.identity or other.identity == self.identity
        )

    def _has_content(self) -> bool:
        return self._acc is not _EMPTY


class DictMerger(BaseBuilder[Tuple[Hashable, Any], Dict[Hashable, Any]]):
    """
    Agrupa pares `(key, value)` combinando valores de chaves iguais com `op`.

    O dicionário resultante preserva a ordem da primeira ocorrência de cada
    chave, igual à execução sequencial.
    """

    kind = "dictmerger"

    def __init__(self, op: BinaryOp = "+") -> None:
        super().__init__()
        self.op_name = op if isinstance(op, str) else getattr(op, "__name__", repr(op))
        self._op, _ = _resolve_op(op)
        self._raw_op = op
        self._items: Optional[Dict[Hashable, Any]] = {}

    def _put(self, key: Hashable, value: Any) -> None:
        if key in self._items:
            self._items[key] = self._op(self._items[key], value)
        else:
            self._items[key] = value

    def _accept(self, value: Tuple[Hashable, Any]) -> None:
        if not isinstance(value, tuple) or len(value) != 2:
            raise type_inference_error(
                expected="(key, value)",
                received=type(value).__name__,
                hint="Um dictmerger recebe apenas pares (chave, valor).",
            )
        self._put(value[0], value[1])

    def _absorb(self, other: "DictMerger") -> None:
        for key, value in other._items.items():
            self._put(key, value)

    def _materialize(self) -> Dict[Hashable, Any]:
        return dict(self._items)

    def _release(self) -> None:
        self._items = None

    def _fresh(self) -> "DictMerger":
        return type(self)(op=self._raw_op)

    def _compatible(self, other: "DictMerger") -> bool:
        return other._raw_op == self._raw_op

    def _has_content(self) -> bool:
        return bool(self._items)
