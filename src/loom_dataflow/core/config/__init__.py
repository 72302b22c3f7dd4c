# src/loom_dataflow/core/config/__init__.py

"""
Camada de configuração do Loom DataFlow.

Este pacote contém as estruturas responsáveis por carregar, mesclar,
identificar e validar a configuração de execução do construto `for`.

A configuração no Loom DataFlow é:
    - declarativa
    - determinística
    - opcional (existe um default embutido completo)

Responsabilidades do pacote:
    - Carregamento de arquivos de configuração (defaults + overrides locais)
    - Resolução de configuração final via deep-merge determinístico
    - Geração de hash canônico para rastreabilidade do run
    - Validação da seção `engine` em `EngineSettings`

Limites explícitos:
    - Não executa iteração
    - Não interage com builders diretamente
"""

from .errors import (
    ConfigError,
    ConfigTypeConflictError,
    DefaultsNotFoundError,
    InvalidConfigRootTypeError,
    UnsupportedConfigFormatError,
)
from .hashing import compute_config_hash
from .loader import load_config
from .merge import deep_merge
from .settings import DEFAULT_CONFIG, EngineSettings, ExecutorMode, resolve_config

__all__ = [
    "ConfigError",
    "ConfigTypeConflictError",
    "DefaultsNotFoundError",
    "InvalidConfigRootTypeError",
    "UnsupportedConfigFormatError",
    "compute_config_hash",
    "load_config",
    "deep_merge",
    "DEFAULT_CONFIG",
    "EngineSettings",
    "ExecutorMode",
    "resolve_config",
]
