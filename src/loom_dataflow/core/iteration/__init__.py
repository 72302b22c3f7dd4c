# src/loom_dataflow/core/iteration/__init__.py
"""
Construto `for` do Loom DataFlow.

Componentes principais:
    - inputs  → normalização posicional das entradas (`Iter`, `Zip`)
    - planner → partições contíguas e determinísticas da faixa de índices
    - engine  → execução serial ou paralela com split/join dos builders

Invariantes:
    - A função de passo é aplicada em ordem estrita de índice
    - O resultado paralelo é idêntico ao resultado serial
"""

from .engine import ForEngine, for_each
from .inputs import Iter, Zip, as_sequence
from .planner import plan_chunks

__all__ = [
    "ForEngine",
    "for_each",
    "Iter",
    "Zip",
    "as_sequence",
    "plan_chunks",
]
