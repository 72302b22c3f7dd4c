# src/loom_dataflow/core/builders/appender.py
"""
Appender: builder default, acumula elementos preservando a ordem de merge.

O tipo de elemento do appender pode ser:
    - None: sem verificação (uso de `map` e `filter`)
    - PLACEHOLDER: tipo diferido (`flatten`); existe apenas para o type
      checker, sem representação nem verificação em runtime
    - um tipo (ou tupla de tipos): declarado explicitamente no call site

Apenas um tipo explícito é verificado: todo merge (e todo elemento
absorvido por join) passa por `isinstance`, e valores incompatíveis
levantam TypeInferenceError.
"""

from __future__ import annotations

from typing import Any, List, Optional

from ..errors import type_inference_error
from .base import BaseBuilder, T
from .types import PLACEHOLDER, ElementTypePlaceholder


def _type_name(elem_type: Any) -> str:
    if isinstance(elem_type, tuple):
        return " | ".join(t.__name__ for t in elem_type)
    return getattr(elem_type, "__name__", repr(elem_type))


def _validate_elem_type(elem_type: Any) -> Any:
    if elem_type is None or isinstance(elem_type, ElementTypePlaceholder):
        return elem_type
    if isinstance(elem_type, type):
        return elem_type
    if isinstance(elem_type, tuple) and elem_type and all(isinstance(t, type) for t in elem_type):
        return elem_type
    raise type_inference_error(
        expected="type, tuple of types or placeholder",
        received=repr(elem_type),
        hint="elem_type deve ser um tipo Python (ex.: int) ou o PLACEHOLDER.",
    )


class Appender(BaseBuilder[T, List[T]]):
    """Builder de lista ordenada (`appender[T]`)."""

    kind = "appender"

    def __init__(self, elem_type: Any = None) -> None:
        super().__init__()
        self.elem_type = _validate_elem_type(elem_type)
        self._items: Optional[List[T]] = []

    @property
    def checked(self) -> bool:
        return self.elem_type is not None and self.elem_type is not PLACEHOLDER

    def _check(self, value: Any) -> None:
        if self.checked and not isinstance(value, self.elem_type):
            raise type_inference_error(
                expected=_type_name(self.elem_type),
                received=type(value).__name__,
            )

    def _accept(self, value: T) -> None:
        self._check(value)
        self._items.append(value)

    def _absorb(self, other: "Appender[T]") -> None:
        if self.checked:
            for value in other._items:
                self._check(value)
        self._items.extend(other._items)

    def _materialize(self) -> List[T]:
        return list(self._items)

    def _release(self) -> None:
        self._items = None

    def _fresh(self) -> "Appender[T]":
        return type(self)(elem_type=self.elem_type)

    def _compatible(self, other: "Appender[T]") -> bool:
        return other.elem_type == self.elem_type

    def _has_content(self) -> bool:
        return bool(self._items)
