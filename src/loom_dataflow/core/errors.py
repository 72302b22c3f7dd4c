"""
Loom DataFlow — Canonical Error Structures (v1)

Este módulo define o padrão canônico de payloads de erro do Loom DataFlow.
Enquanto `exceptions.py` define o que é levantado, este módulo define o
que é **registrado**: uma representação serializável e estável de cada
falha, usada pelo log estruturado do RunContext.

Erros devem ser:

- explícitos
- serializáveis
- rastreáveis
- acionáveis

Nenhum fallback silencioso é permitido: a conversão para payload nunca
substitui a propagação da exceção ao chamador.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional

from .exceptions import (
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


# ---------------------------------------------------------------------------
# Payload canônico
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class LoomErrorPayload:
    """
    Payload canônico de erro do Loom DataFlow.

    Campos:
    - type: código estável do erro (não é texto livre)
    - message: mensagem curta, humana e objetiva
    - details: dados estruturados relevantes para diagnóstico
    - hint: ação sugerida ao chamador (onde corrigir)
    """

    type: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)
    hint: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Retorna representação serializável do erro."""
        return asdict(self)


# ---------------------------------------------------------------------------
# Catálogo canônico de tipos de erro (v1)
# ---------------------------------------------------------------------------

# Builders
BUILDER_INVALID_STATE = "BUILDER_INVALID_STATE"
TYPE_INFERENCE_ERROR = "TYPE_INFERENCE_ERROR"

# Iteração
USER_FUNCTION_ERROR = "USER_FUNCTION_ERROR"
ITERATION_INVALID_STEP_RESULT = "ITERATION_INVALID_STEP_RESULT"
ITERATION_INVALID_INPUT = "ITERATION_INVALID_INPUT"

# Operações
OPERATION_ARITY_ERROR = "OPERATION_ARITY_ERROR"
OPERATION_UNKNOWN = "OPERATION_UNKNOWN"
OPERATION_DUPLICATE = "OPERATION_DUPLICATE"

# Engine / Execução
ENGINE_EXECUTION_ERROR = "ENGINE_EXECUTION_ERROR"
ENGINE_CONFIGURATION_ERROR = "ENGINE_CONFIGURATION_ERROR"


_TYPE_BY_EXCEPTION = {
    InvalidBuilderState: BUILDER_INVALID_STATE,
    TypeInferenceError: TYPE_INFERENCE_ERROR,
    UserFunctionError: USER_FUNCTION_ERROR,
    InvalidStepResult: ITERATION_INVALID_STEP_RESULT,
    InvalidIterationInput: ITERATION_INVALID_INPUT,
    OperationArityError: OPERATION_ARITY_ERROR,
    UnknownOperationError: OPERATION_UNKNOWN,
    DuplicateOperationError: OPERATION_DUPLICATE,
    EngineConfigurationError: ENGINE_CONFIGURATION_ERROR,
}


def exception_to_error(exc: BaseException) -> LoomErrorPayload:
    """Converte exceções em LoomErrorPayload (serializável, acionável).

    Regras:
    - LoomException: código estável a partir da classe; message/details/hint preservados.
    - Outras exceções: encapsular como ENGINE_EXECUTION_ERROR sem expor stack trace.
    """
    if isinstance(exc, LoomException):
        code = ENGINE_EXECUTION_ERROR
        for cls in type(exc).__mro__:
            if cls in _TYPE_BY_EXCEPTION:
                code = _TYPE_BY_EXCEPTION[cls]
                break
        return LoomErrorPayload(
            type=code,
            message=exc.message or "Erro de execução",
            details=dict(exc.details or {}),
            hint=exc.hint,
        )

    return engine_execution_error(
        exc_type=exc.__class__.__name__,
        exc_message=str(exc) or None,
    )


# ---------------------------------------------------------------------------
# Helpers de fábrica
# ---------------------------------------------------------------------------

def invalid_builder_state(
    *,
    builder: str,
    state: str,
    operation: str,
    hint: str = "Use sempre o builder retornado pela última chamada de merge; um builder finalizado não pode ser reutilizado.",
) -> InvalidBuilderState:
    return InvalidBuilderState(
        message=f"Builder {builder} não pode executar '{operation}' no estado '{state}'",
        details={
            "builder": builder,
            "state": state,
            "operation": operation,
        },
        hint=hint,
    )


def user_function_error(
    *,
    index: int,
    exc: BaseException,
    hint: str = "Corrija a função fornecida; nenhuma retentativa ou resultado parcial é produzido.",
) -> UserFunctionError:
    return UserFunctionError(
        message=f"Função do usuário falhou no elemento de índice {index}",
        details={
            "index": index,
            "exc_type": exc.__class__.__name__,
            "exc_message": str(exc),
        },
        hint=hint,
    )


def type_inference_error(
    *,
    expected: str,
    received: str,
    hint: str = "Declare explicitamente o tipo de elemento ou garanta que a coleção seja homogênea.",
) -> TypeInferenceError:
    return TypeInferenceError(
        message=f"Tipo de elemento incompatível: esperado {expected}, recebido {received}",
        details={
            "expected": expected,
            "received": received,
        },
        hint=hint,
    )


def invalid_iteration_input(
    *,
    reason: str,
    received: Optional[str] = None,
    hint: str = "Forneça uma coleção finita e ordenada (list, tuple, range, array ou Series).",
    **extra: Any,
) -> InvalidIterationInput:
    details: Dict[str, Any] = {"reason": reason, "received": received}
    details.update(extra)
    return InvalidIterationInput(
        message=f"Entrada inválida para iteração: {reason}",
        details=details,
        hint=hint,
    )


def engine_execution_error(
    *,
    exc_type: Optional[str] = None,
    exc_message: Optional[str] = None,
    hint: str = "Verifique o log do run para diagnosticar a falha. Nenhum fallback é aplicado automaticamente.",
) -> LoomErrorPayload:
    return LoomErrorPayload(
        type=ENGINE_EXECUTION_ERROR,
        message="Falha inesperada durante a execução",
        details={
            "exc_type": exc_type,
            "exc_message": exc_message,
        },
        hint=hint,
    )


def engine_configuration_error(
    *,
    message: str = "Configuração inválida para execução",
    details: Optional[Dict[str, Any]] = None,
    hint: str = "Revise a seção `engine` da configuração antes de reexecutar.",
) -> EngineConfigurationError:
    return EngineConfigurationError(
        message=message,
        details=details or {},
        hint=hint,
    )
