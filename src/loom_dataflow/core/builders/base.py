# src/loom_dataflow/core/builders/base.py
"""
Contrato canônico de Builder do Loom DataFlow.

Um builder é um acumulador linear: cada `merge` consome o handle recebido
e devolve um novo handle, único dono do conteúdo acumulado. `result()`
materializa o conteúdo e encerra o ciclo de vida.

Contrato:
    - merge(value) → novo handle com `value` anexado; o handle antigo é CONSUMED
    - result()     → materializa o conteúdo; o handle passa a FINALIZED
    - split(n)     → n handles independentes sobre faixas disjuntas; o
                     primeiro carrega o conteúdo já acumulado
    - join(parts)  → concatena as partes em ordem crescente de índice

Decisões arquiteturais:
    - Linearidade é garantida por uma tag de estado verificada em runtime
    - O armazenamento é reutilizado in-place; apenas o handle muda
    - `join` é associativo apenas na ordem de índice (nunca comutativo)

Invariantes:
    - Os elementos observáveis após `result()` são, em ordem, os elementos
      passados a `merge`, inclusive quando distribuídos em partições
      unidas por `join` na ordem das partições
    - Nenhuma operação é aceita por um handle CONSUMED ou FINALIZED

Limites explícitos:
    - Não agenda execução paralela (responsabilidade do construto `for`)
    - Não usa locks: cada handle tem exatamente um dono ativo
"""

from __future__ import annotations

import copy
from typing import Any, Generic, List, Protocol, Sequence, TypeVar, runtime_checkable

from ..errors import invalid_builder_state
from .types import LIVE_STATES, BuilderState


T = TypeVar("T")
R = TypeVar("R")
B = TypeVar("B", bound="BaseBuilder")


@runtime_checkable
class Builder(Protocol):
    """
    Protocolo estrutural de um builder.

    Qualquer objeto com `merge`, `result`, `split` e `join` pode ser
    conduzido pelo construto `for`; a verificação é por duck typing
    (`@runtime_checkable`).
    """

    def merge(self, value: Any) -> "Builder":
        ...

    def result(self) -> Any:
        ...

    def split(self, n: int) -> List["Builder"]:
        ...

    def join(self, parts: Sequence["Builder"]) -> "Builder":
        ...


class BaseBuilder(Generic[T, R]):
    """
    Implementação base do ciclo de vida linear de um builder.

    Subclasses implementam apenas o armazenamento:
        - _accept(value): valida e anexa um valor ao armazenamento
        - _absorb(other): anexa o conteúdo de outra parte (join)
        - _materialize(): produz o resultado final
        - _release(): solta as referências ao armazenamento
        - _fresh(): cria um builder vazio com a mesma configuração
    """

    kind = "builder"

    def __init__(self) -> None:
        self._state = BuilderState.CREATED

    # -----------------------------
    # Estado
    # -----------------------------
    @property
    def state(self) -> BuilderState:
        return self._state

    @property
    def is_live(self) -> bool:
        return self._state in LIVE_STATES

    def _ensure_live(self, operation: str) -> None:
        if not self.is_live:
            raise invalid_builder_state(
                builder=self.kind,
                state=self._state.value,
                operation=operation,
            )

    def _handoff(self: B, state: BuilderState | None = None) -> B:
        successor = copy.copy(self)
        successor._state = state or self._state
        self._state = BuilderState.CONSUMED
        self._release()
        return successor

    # -----------------------------
    # Contrato
    # -----------------------------
    def merge(self: B, value: T) -> B:
        self._ensure_live("merge")
        self._accept(value)
        return self._handoff(BuilderState.MERGED)

    def result(self) -> R:
        self._ensure_live("result")
        value = self._materialize()
        self._state = BuilderState.FINALIZED
        self._release()
        return value

    def split(self: B, n: int) -> List[B]:
        if isinstance(n, bool) or not isinstance(n, int) or n < 1:
            raise ValueError(f"split requires a positive int, got {n!r}")
        self._ensure_live("split")
        fresh = [self._fresh() for _ in range(n - 1)]
        return [self._handoff()] + fresh

    @classmethod
    def join(cls, parts: Sequence[B]) -> B:
        parts = list(parts)
        if not parts:
            raise ValueError("join requires at least one part")
        if len({id(p) for p in parts}) != len(parts):
            raise invalid_builder_state(
                builder=cls.kind,
                state="duplicated",
                operation="join",
                hint="Cada parte de um split deve ser passada a join exatamente uma vez.",
            )
        head_type = type(parts[0])
        for p in parts:
            if type(p) is not head_type:
                raise invalid_builder_state(
                    builder=getattr(p, "kind", type(p).__name__),
                    state="incompatible",
                    operation="join",
                    hint=f"Todas as partes de um join devem ser do tipo {head_type.__name__}.",
                )
            if not parts[0]._compatible(p):
                raise invalid_builder_state(
                    builder=p.kind,
                    state="incompatible",
                    operation="join",
                    hint="Todas as partes de um join devem vir do mesmo split (mesma configuração).",
                )
            p._ensure_live("join")

        head = parts[0]._handoff()
        for p in parts[1:]:
            head._absorb(p)
            p._state = BuilderState.CONSUMED
            p._release()
        head._state = BuilderState.MERGED if head._has_content() else BuilderState.CREATED
        return head

    # -----------------------------
    # Armazenamento (subclasses)
    # -----------------------------
    def _accept(self, value: T) -> None:
        raise NotImplementedError

    def _absorb(self: B, other: B) -> None:
        raise NotImplementedError

    def _materialize(self) -> R:
        raise NotImplementedError

    def _release(self) -> None:
        raise NotImplementedError

    def _fresh(self: B) -> B:
        raise NotImplementedError

    def _has_content(self) -> bool:
        raise NotImplementedError

    def _compatible(self: B, other: B) -> bool:
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(state={self._state.value})"
