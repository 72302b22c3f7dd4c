# src/loom_dataflow/core/builders/types.py
"""
Tipos canônicos dos builders do Loom DataFlow.

Componentes:
    - BuilderState → ciclo de vida de um handle de builder
    - ElementTypePlaceholder / PLACEHOLDER → tipo de elemento diferido (`?`)

Invariantes:
    - Um handle só aceita operações nos estados CREATED e MERGED
    - CONSUMED e FINALIZED são terminais para o handle
"""

from __future__ import annotations

from enum import Enum


class BuilderState(str, Enum):
    """
    Estados de um handle de builder.

    Estados definidos:
        - CREATED: recém-criado, logicamente vazio ou recém-particionado
        - MERGED: recebeu ao menos um merge
        - CONSUMED: o conteúdo foi transferido para outro handle
          (merge, split ou join); o handle não pode mais ser usado
        - FINALIZED: `result()` foi chamado; o handle não pode mais ser usado

    Decisões arquiteturais:
        - O estado é uma tag verificada em runtime a cada operação
        - A transferência de posse é simulada: o handle antigo é invalidado
          e um novo handle passa a ser o único dono do conteúdo
    """
    CREATED = "created"
    MERGED = "merged"
    CONSUMED = "consumed"
    FINALIZED = "finalized"


LIVE_STATES = frozenset({BuilderState.CREATED, BuilderState.MERGED})


class ElementTypePlaceholder:
    """
    Tipo de elemento diferido de um builder (`appender[?]`).

    O placeholder não tem representação de dados nem verificação em
    runtime: um builder criado com ele aceita qualquer valor, como
    `elem_type=None`.
    Para checagem estática, o tipo é carregado pelos parâmetros genéricos
    (`Appender[T]`).
    """

    _instance = None

    def __new__(cls) -> "ElementTypePlaceholder":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "?"

    def __reduce__(self):
        return (ElementTypePlaceholder, ())


PLACEHOLDER = ElementTypePlaceholder()
