"""
Loom DataFlow — Canonical Exceptions (v1)

Este módulo define as exceções tipadas do Loom DataFlow.

Objetivo:
- Permitir que builders, o construto `for` e as operações levantem
  exceções semânticas tipadas
- Facilitar o mapeamento determinístico para LoomErrorPayload
- Evitar ValueError/RuntimeError genéricos nas violações de contrato

Regras:
- Todas as falhas desta camada são fatais: não existe recovery local
- Exceções carregam apenas dados estruturados (serializáveis) em `details`
- A exceção original de uma função do usuário é preservada em `__cause__`
- Instâncias não são congeladas (`eq=False`): o runtime atribui
  `__traceback__` e `__context__` ao propagar
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(eq=False)
class LoomException(Exception):
    """Base class para exceções internas do Loom.

    Importante:
    - Sempre carregar dados estruturados em `details`
    - Não embedar stack trace em payloads de erro
    - Mensagem deve ser curta e humana
    """

    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover
        return self.message


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class InvalidBuilderState(LoomException):
    """Builder usado após ter sido consumido (merge/split/join) ou finalizado."""


@dataclass(eq=False)
class TypeInferenceError(LoomException):
    """Tipo de elemento do builder não pôde ser resolvido para o valor recebido."""


# ---------------------------------------------------------------------------
# Iteração
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class UserFunctionError(LoomException):
    """Função fornecida pelo usuário falhou durante a iteração."""


@dataclass(eq=False)
class InvalidStepResult(LoomException):
    """Função de passo do `for` retornou algo que não é um builder."""


@dataclass(eq=False)
class InvalidIterationInput(LoomException):
    """Entrada do `for` não é uma coleção finita e ordenada válida."""


# ---------------------------------------------------------------------------
# Operações / Engine
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class OperationArityError(LoomException):
    """Operação invocada com número de parâmetros diferente da aridade fixa."""


@dataclass(eq=False)
class UnknownOperationError(LoomException):
    """Operação não registrada."""


@dataclass(eq=False)
class DuplicateOperationError(LoomException):
    """Operação registrada duas vezes com o mesmo nome."""


@dataclass(eq=False)
class EngineConfigurationError(LoomException):
    """Configuração inválida ou inconsistente para execução."""
