# src/loom_dataflow/core/builders/__init__.py
"""
Builders do Loom DataFlow.

Um builder é o acumulador linear conduzido pelo construto `for`:

- **types**
  - `BuilderState`: ciclo de vida de um handle
  - `PLACEHOLDER`: tipo de elemento diferido (`?`)

- **base**
  - `Builder` (Protocol): contrato estrutural (merge/result/split/join)
  - `BaseBuilder`: ciclo de vida linear verificado em runtime

- **appender** / **merger**
  - `Appender`: lista ordenada (builder default)
  - `Merger`: redução por operador associativo
  - `DictMerger`: redução agrupada por chave
"""

from .appender import Appender
from .base import BaseBuilder, Builder
from .merger import DictMerger, Merger
from .types import PLACEHOLDER, BuilderState, ElementTypePlaceholder

__all__ = [
    "Appender",
    "BaseBuilder",
    "Builder",
    "DictMerger",
    "Merger",
    "PLACEHOLDER",
    "BuilderState",
    "ElementTypePlaceholder",
]
