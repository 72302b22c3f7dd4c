"""
Configuração default e settings tipados do engine do construto `for`.

Config esperada (exemplo):

engine:
  mode: threads          # serial | threads
  workers: 4             # número máximo de partições paralelas
  min_chunk_size: 1024   # tamanho mínimo de cada partição

Decisões arquiteturais:
    - O default é sequencial (`serial`), equivalente a um único worker
    - Valores inválidos são rejeitados, nunca corrigidos silenciosamente
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..errors import engine_configuration_error
from .merge import deep_merge


DEFAULT_CONFIG: Dict[str, Any] = {
    "engine": {
        "mode": "serial",
        "workers": 1,
        "min_chunk_size": 1,
    },
}


class ExecutorMode(str, Enum):
    """
    Modos de execução do construto `for`.

    - SERIAL: uma única partição, executada na thread chamadora
    - THREADS: partições executadas em um ThreadPoolExecutor
    """
    SERIAL = "serial"
    THREADS = "threads"


def resolve_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Aplica `config` sobre `DEFAULT_CONFIG` (deep-merge, sem mutar inputs)."""
    return deep_merge(DEFAULT_CONFIG, config or {})


def _positive_int(engine_cfg: Dict[str, Any], key: str) -> int:
    value = engine_cfg.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise engine_configuration_error(
            message=f"engine.{key} deve ser um inteiro >= 1",
            details={"key": f"engine.{key}", "value": repr(value)},
        )
    return value


@dataclass(frozen=True)
class EngineSettings:
    """Settings validados da seção `engine`."""

    mode: ExecutorMode = ExecutorMode.SERIAL
    workers: int = 1
    min_chunk_size: int = 1

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None) -> "EngineSettings":
        """
        Constrói settings a partir de uma configuração (parcial ou completa).

        A configuração é sempre resolvida sobre `DEFAULT_CONFIG`, de modo que
        chaves ausentes assumem o default.

        Raises:
            EngineConfigurationError: Se `mode`, `workers` ou `min_chunk_size`
                forem inválidos.
            ConfigTypeConflictError: Se a seção `engine` não for um mapa.
        """
        engine_cfg = resolve_config(config)["engine"]

        raw_mode = engine_cfg.get("mode")
        try:
            mode = ExecutorMode(raw_mode)
        except ValueError:
            raise engine_configuration_error(
                message="engine.mode deve ser 'serial' ou 'threads'",
                details={"key": "engine.mode", "value": repr(raw_mode)},
            ) from None

        return cls(
            mode=mode,
            workers=_positive_int(engine_cfg, "workers"),
            min_chunk_size=_positive_int(engine_cfg, "min_chunk_size"),
        )

    @property
    def parallel(self) -> bool:
        return self.mode is ExecutorMode.THREADS and self.workers > 1
