# src/loom_dataflow/core/iteration/engine.py
"""
Engine do construto `for` do Loom DataFlow.

O construto `for` conduz um builder por uma coleção ordenada, aplicando
uma função de passo `(builder, elemento) -> builder` (ou
`(builder, índice, elemento) -> builder`) uma vez por elemento, em ordem
estrita de índice, e devolve o builder final.

Execução:
    - serial: uma única faixa, na thread chamadora
    - threads: a faixa de índices é particionada (`plan_chunks`), cada
      partição roda sequencialmente contra um builder privado obtido por
      `split`, e os builders das partições são unidos por `join` em ordem
      crescente de partição

Decisões arquiteturais:
    - A única sincronização é a barreira de `join` após todas as partições
    - Chamadas aninhadas (`for` dentro da função de passo) sempre rodam
      em modo serial, contra o builder recebido pela função de passo
    - Falhas são fatais (fail-fast): partições pendentes são canceladas,
      o trabalho parcial é descartado e a exceção é repassada ao chamador
    - Exceções de funções do usuário são encapsuladas em UserFunctionError;
      exceções do próprio Loom (LoomException) propagam sem encapsulamento

Invariantes:
    - A função de passo é chamada exatamente uma vez por elemento
    - O builder visto no índice i reflete os índices anteriores da mesma
      partição, já mesclados em ordem
    - Nenhum builder parcial é devolvido em caso de falha

Limites explícitos:
    - Não oferece cancelamento externo nem retry
    - Não decide o kind do builder (responsabilidade do chamador)
"""

from __future__ import annotations

import threading
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Any, Callable, List, Optional, Sequence

from ..builders.base import Builder
from ..config.settings import EngineSettings, ExecutorMode
from ..errors import exception_to_error, invalid_builder_state, user_function_error
from ..exceptions import InvalidStepResult, LoomException
from ..run_context import RunContext
from .inputs import as_sequence
from .planner import Chunk, plan_chunks


StepFunction = Callable[..., Builder]

_STATE = threading.local()


def _depth() -> int:
    return getattr(_STATE, "depth", 0)


def _check_builder(obj: Any, *, index: Optional[int], operation: str) -> Builder:
    if not isinstance(obj, Builder):
        raise InvalidStepResult(
            message="Função de passo deve retornar um builder",
            details={"index": index, "received": type(obj).__name__},
            hint="Retorne o builder produzido por merge (ou o builder recebido, se nada foi mesclado).",
        )
    if getattr(obj, "is_live", True) is False:
        state = getattr(obj, "state", None)
        raise invalid_builder_state(
            builder=getattr(obj, "kind", type(obj).__name__),
            state=getattr(state, "value", str(state)),
            operation=operation,
        )
    return obj


class ForEngine:
    """Executor canônico do construto `for` (planner + execução + join)."""

    def __init__(
        self,
        *,
        settings: Optional[EngineSettings] = None,
        ctx: Optional[RunContext] = None,
        scope: str = "for",
    ):
        if settings is None:
            settings = ctx.settings if ctx is not None else EngineSettings()
        self.settings: EngineSettings = settings
        self.ctx: Optional[RunContext] = ctx
        self.scope = scope

    # ------------------------------------------------------------------
    # Log estruturado e warnings (apenas no nível mais externo)
    # ------------------------------------------------------------------
    def _log(self, level: str, message: str, **extra: Any) -> None:
        if self.ctx is not None:
            self.ctx.log(scope=self.scope, level=level, message=message, **extra)

    def _warn(self, message: str) -> None:
        if self.ctx is not None:
            self.ctx.add_warning(scope=self.scope, message=message)

    # ------------------------------------------------------------------
    # Execução de uma faixa
    # ------------------------------------------------------------------
    @staticmethod
    def _run_range(
        seq: Any,
        start: int,
        end: int,
        builder: Builder,
        func: StepFunction,
        with_index: bool,
    ) -> Builder:
        b = builder
        for i in range(start, end):
            element = seq[i]
            try:
                nb = func(b, i, element) if with_index else func(b, element)
            except LoomException:
                raise
            except Exception as exc:
                raise user_function_error(index=i, exc=exc) from exc
            b = _check_builder(nb, index=i, operation="step")
        return b

    def _run_chunk(
        self,
        seq: Any,
        chunk: Chunk,
        builder: Builder,
        func: StepFunction,
        with_index: bool,
    ) -> Builder:
        _STATE.depth = 1
        try:
            return self._run_range(seq, chunk[0], chunk[1], builder, func, with_index)
        finally:
            _STATE.depth = 0

    def _run_parallel(
        self,
        seq: Any,
        chunks: List[Chunk],
        builder: Builder,
        func: StepFunction,
        with_index: bool,
    ) -> Builder:
        parts = builder.split(len(chunks))
        if len(parts) != len(chunks):
            raise ValueError(f"split({len(chunks)}) returned {len(parts)} builders")

        with ThreadPoolExecutor(max_workers=len(chunks), thread_name_prefix="loom-for") as pool:
            futures = [
                pool.submit(self._run_chunk, seq, chunk, part, func, with_index)
                for chunk, part in zip(chunks, parts)
            ]
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)
            if pending:
                for f in pending:
                    f.cancel()
                wait(futures)

        failures = [
            f.exception() for f in futures
            if not f.cancelled() and f.exception() is not None
        ]
        if failures:
            raise failures[0]

        finished: Sequence[Builder] = [f.result() for f in futures]
        return finished[0].join(finished)

    # ------------------------------------------------------------------
    # Contrato público
    # ------------------------------------------------------------------
    def run(
        self,
        data: Any,
        builder: Builder,
        func: StepFunction,
        *,
        with_index: bool = False,
    ) -> Builder:
        """
        Executa o construto `for` e devolve o builder final.

        Args:
            data: Coleção ordenada, `Iter` ou `Zip`.
            builder: Builder inicial (consumido pela execução).
            func: Função de passo `(b, e) -> b` ou `(b, i, e) -> b`.
            with_index (bool): Se True, a função de passo recebe o índice.

        Raises:
            InvalidIterationInput: Se `data` não for uma coleção ordenada.
            InvalidBuilderState: Se o builder inicial (ou um retornado) não estiver vivo.
            InvalidStepResult: Se a função de passo não retornar um builder.
            UserFunctionError: Se a função de passo falhar.
        """
        depth = _depth()
        outermost = depth == 0
        _STATE.depth = depth + 1
        try:
            seq = as_sequence(data)
            _check_builder(builder, index=None, operation="for")
            length = len(seq)

            workers = self.settings.workers if outermost and self.settings.parallel else 1
            chunks = plan_chunks(length, workers, self.settings.min_chunk_size)
            if outermost:
                self._log(
                    "INFO",
                    "for.start",
                    length=length,
                    mode=self.settings.mode.value,
                    chunks=len(chunks),
                )
                if self.settings.mode is ExecutorMode.THREADS and self.settings.workers == 1:
                    self._warn("engine.mode=threads com engine.workers=1 executa em série")

            if len(chunks) > 1:
                result = self._run_parallel(seq, chunks, builder, func, with_index)
            else:
                result = self._run_range(seq, 0, length, builder, func, with_index)

        except Exception as exc:
            if outermost:
                self._log("ERROR", "for.failed", error=exception_to_error(exc).to_dict())
            raise
        finally:
            _STATE.depth = depth

        if outermost:
            self._log("INFO", "for.join", length=length, chunks=len(chunks))
        return result


def for_each(
    data: Any,
    builder: Builder,
    func: StepFunction,
    *,
    with_index: bool = False,
    ctx: Optional[RunContext] = None,
    settings: Optional[EngineSettings] = None,
) -> Builder:
    """
    Construto `for`: aplica `func` a cada elemento de `data`, em ordem,
    encadeando o builder, e devolve o builder final.

    Examples
    --------
    >>> from loom_dataflow.core.builders import Appender
    >>> for_each([1, 2, 3], Appender(), lambda b, e: b.merge(e * 10)).result()
    [10, 20, 30]
    """
    return ForEngine(settings=settings, ctx=ctx).run(data, builder, func, with_index=with_index)
