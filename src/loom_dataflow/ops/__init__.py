# src/loom_dataflow/ops/__init__.py
"""
Camada de operações do Loom DataFlow.

- **operations**: `map`, `filter`, `flatten`, composições fixas de
  Appender + construto `for`
- **registry**: `OperationRegistry` com aridade fixa por operação

Uso:

    >>> from loom_dataflow import ops
    >>> ops.map([1, 2, 3], lambda x: x * 2)
    [2, 4, 6]
"""

from .operations import filter, flatten, map  # noqa: A004
from .registry import Operation, OperationRegistry, default_registry

__all__ = [
    "map",
    "filter",
    "flatten",
    "Operation",
    "OperationRegistry",
    "default_registry",
]
