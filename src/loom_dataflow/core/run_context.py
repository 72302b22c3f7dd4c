"""
RunContext — Contexto canônico de execução do Loom DataFlow.

Este módulo define o **RunContext**, a estrutura opcional passada ao
construto `for` e às operações (`map`, `filter`, `flatten`) para:

- fornecer a configuração efetiva (e, a partir dela, `EngineSettings`)
- registrar logs estruturados de execução (eventos)
- coletar warnings não fatais por escopo

Princípios fundamentais:
- Isolamento por execução (cada run possui seu próprio contexto)
- O contexto nunca participa do resultado: apenas observa
- Eventos são dicionários serializáveis, nunca texto livre

Limites explícitos:
- Não executa iteração
- Não persiste eventos automaticamente
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import threading
import uuid

from .config.hashing import compute_config_hash
from .config.settings import EngineSettings, resolve_config


@dataclass
class RunContext:
    """
    Contexto de execução compartilhado de um run.

    Campos canônicos:
    - run_id: identificador único da execução
    - created_at: timestamp UTC de criação do contexto (ISO 8601)
    - config: configuração efetiva (DEFAULT_CONFIG + overrides)
    - meta: metadados de execução (ex.: config_hash)
    - warnings: warnings por escopo
    - events: log estruturado de eventos
    """

    run_id: str
    created_at: str
    config: Dict[str, Any]
    meta: Dict[str, Any] = field(default_factory=dict)

    warnings: Dict[str, List[str]] = field(default_factory=dict)
    events: List[Dict[str, Any]] = field(default_factory=list)

    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    @classmethod
    def create(
        cls,
        *,
        config: Optional[Dict[str, Any]] = None,
        run_id: Optional[str] = None,
    ) -> "RunContext":
        """Cria um contexto com config resolvida sobre os defaults e hash registrado."""
        effective = resolve_config(config)
        return cls(
            run_id=run_id or uuid.uuid4().hex,
            created_at=datetime.now(timezone.utc).isoformat(),
            config=effective,
            meta={"config_hash": compute_config_hash(effective)},
        )

    @property
    def settings(self) -> EngineSettings:
        return EngineSettings.from_config(self.config)

    # -----------------------------
    # Logging & warnings
    # -----------------------------
    def log(self, *, scope: str, level: str, message: str, **extra: Any) -> None:
        event = {
            "run_id": self.run_id,
            "scope": scope,
            "level": level,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        event.update(extra)
        with self._lock:
            self.events.append(event)

    def add_warning(self, *, scope: str, message: str) -> None:
        with self._lock:
            self.warnings.setdefault(scope, []).append(message)

    def events_for(self, scope: str) -> List[Dict[str, Any]]:
        return [e for e in self.events if e["scope"] == scope]
