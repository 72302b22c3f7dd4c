# src/loom_dataflow/ops/registry.py
"""
Registro de operações nomeadas com aridade fixa.

Cada operação do Loom DataFlow é exposta por nome e com um número fixo
de parâmetros posicionais, sem defaults:

    - map(data, func)     → 2
    - filter(data, func)  → 2
    - flatten(data)       → 1

O `OperationRegistry` valida nome e aridade antes de qualquer execução,
de modo que uma invocação malformada falha sem tocar nos dados.

Decisões arquiteturais:
    - Nomes são únicos; duplicidade é erro estrutural
    - A ordem de registro é preservada
    - Opções nomeadas (ex.: `ctx`, `elem_type`) não contam na aridade

Limites explícitos:
    - Não infere tipos nem expande texto
    - Não executa iteração por conta própria
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

from ..core.exceptions import DuplicateOperationError, OperationArityError, UnknownOperationError
from . import operations


@dataclass(frozen=True)
class Operation:
    """Operação registrada: nome, aridade posicional fixa e implementação."""

    name: str
    arity: int
    func: Callable[..., Any]


@dataclass
class OperationRegistry:
    """
    Registro canônico de operações nomeadas.

    Invariantes:
        - Cada nome é único no registry
        - `names()` reflete exatamente a ordem de registro
    """

    _ops: Dict[str, Operation] = field(default_factory=dict, init=False, repr=False)
    _order: List[str] = field(default_factory=list, init=False, repr=False)

    def register(self, name: str, func: Callable[..., Any], *, arity: int) -> Operation:
        if not isinstance(name, str) or not name.strip():
            raise ValueError("operation name must be a non-empty string")
        if isinstance(arity, bool) or not isinstance(arity, int) or arity < 0:
            raise ValueError(f"arity must be an int >= 0, got {arity!r}")
        if name in self._ops:
            raise DuplicateOperationError(
                message=f"Operação duplicada: {name}",
                details={"name": name},
            )

        op = Operation(name=name, arity=arity, func=func)
        self._ops[name] = op
        self._order.append(name)
        return op

    def get(self, name: str) -> Operation:
        if name not in self._ops:
            raise UnknownOperationError(
                message=f"Operação desconhecida: {name}",
                details={"name": name, "known": list(self._order)},
            )
        return self._ops[name]

    def names(self) -> List[str]:
        return list(self._order)

    def __contains__(self, name: object) -> bool:
        return name in self._ops

    def invoke(self, name: str, *args: Any, **options: Any) -> Any:
        op = self.get(name)
        if len(args) != op.arity:
            raise OperationArityError(
                message=f"Operação '{name}' espera {op.arity} parâmetro(s), recebeu {len(args)}",
                details={"name": name, "expected": op.arity, "received": len(args)},
                hint="Operações têm aridade fixa e não possuem parâmetros default.",
            )
        return op.func(*args, **options)


def default_registry() -> OperationRegistry:
    """Cria um registry com as operações canônicas map, filter e flatten."""
    reg = OperationRegistry()
    reg.register("map", operations.map, arity=2)
    reg.register("filter", operations.filter, arity=2)
    reg.register("flatten", operations.flatten, arity=1)
    return reg
