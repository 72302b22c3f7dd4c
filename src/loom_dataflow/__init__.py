# src/loom_dataflow/__init__.py
"""
Loom DataFlow — transformações de coleções sobre um protocolo builder + `for`.

Este pacote raiz define o namespace público do Loom DataFlow. Todas as
operações (`map`, `filter`, `flatten`) são composições fixas de um único
mecanismo: um builder (acumulador linear) conduzido por uma iteração
ordenada, que pode ser particionada entre threads e reunida por `join`
sem alterar o resultado.

Arquitetura em alto nível:
    - core.builders    → Appender, Merger, DictMerger (merge/result/split/join)
    - core.iteration   → construto `for` (`for_each`, `Iter`, `Zip`)
    - core.config      → carregamento, merge, hashing e settings do engine
    - core.run_context → log estruturado de execução
    - ops              → map, filter, flatten e registry de aridade fixa

Limites explícitos:
    - Não define linguagem de expressões nem sistema de tipos
    - Não agenda execução fora do construto `for`
"""

from .core.builders import PLACEHOLDER, Appender, BuilderState, DictMerger, Merger
from .core.errors import LoomErrorPayload, exception_to_error
from .core.exceptions import (
    DuplicateOperationError,
    EngineConfigurationError,
    InvalidBuilderState,
    InvalidIterationInput,
    InvalidStepResult,
    LoomException,
    OperationArityError,
    TypeInferenceError,
    UnknownOperationError,
    UserFunctionError,
)
from .core.iteration import Iter, Zip, for_each
from .core.run_context import RunContext
from .ops import default_registry, filter, flatten, map  # noqa: A004

__all__ = [
    "PLACEHOLDER",
    "Appender",
    "BuilderState",
    "DictMerger",
    "Merger",
    "LoomErrorPayload",
    "exception_to_error",
    "DuplicateOperationError",
    "EngineConfigurationError",
    "InvalidBuilderState",
    "InvalidIterationInput",
    "InvalidStepResult",
    "LoomException",
    "OperationArityError",
    "TypeInferenceError",
    "UnknownOperationError",
    "UserFunctionError",
    "Iter",
    "Zip",
    "for_each",
    "RunContext",
    "default_registry",
    "filter",
    "flatten",
    "map",
]
