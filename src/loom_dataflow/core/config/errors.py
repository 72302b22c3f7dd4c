"""
Exceções da camada de configuração do Loom DataFlow.

Estas exceções representam falhas estruturais durante o carregamento e
o merge de arquivos de configuração. Valores inválidos *dentro* de uma
configuração estruturalmente correta (ex.: `engine.workers: 0`) são
reportados por `EngineConfigurationError`, em `core.exceptions`.

Invariantes:
    - Todas as exceções de configuração herdam de `ConfigError`
    - Nenhuma exceção representa falha de builder ou de função do usuário
"""


class ConfigError(Exception):
    """
    Exceção base para erros estruturais de configuração.

    Permite captura genérica de falhas de load/merge, distinta das falhas
    de execução do construto `for`.
    """


class DefaultsNotFoundError(ConfigError):
    """
    Arquivo de configuração base (defaults) não encontrado.

    Decisões arquiteturais:
        - Quando um caminho de defaults é informado, ele é obrigatório
        - Não há tentativa de inferir ou criar o arquivo
    """


class UnsupportedConfigFormatError(ConfigError):
    """
    Formato de arquivo de configuração não suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)
    """


class InvalidConfigRootTypeError(ConfigError):
    """Conteúdo raiz da configuração não é um dicionário (`dict`)."""


class ConfigTypeConflictError(ConfigError):
    """
    Conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - base:     {"engine": {"workers": 4}}
        - override: {"engine": "threads"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """
