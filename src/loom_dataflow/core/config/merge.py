"""
Deep-merge canônico de configuração.

Política de merge (v1):
    - dict → merge recursivo por chave
    - list → sobrescrita total (sem merge elemento a elemento)
    - escalar → sobrescrita direta
    - None na base → aceita qualquer override (chave opcional)
    - conflito de tipos → erro estrutural explícito, com o caminho da chave
      (ex.: `engine.workers`)

Invariantes:
    - Nenhum input é mutado
    - A mesma entrada sempre produz a mesma saída
"""

from copy import deepcopy
from typing import Any, Dict

from .errors import ConfigTypeConflictError


def _conflict(path: str, base_value: Any, override_value: Any) -> ConfigTypeConflictError:
    return ConfigTypeConflictError(
        f"Conflito de tipo na chave '{path}': "
        f"{type(base_value).__name__} vs {type(override_value).__name__}"
    )


def _merge_into(result: Dict[str, Any], override: Dict[str, Any], prefix: str) -> None:
    for key, value in override.items():
        path = f"{prefix}{key}"
        current = result.get(key)

        if key not in result or current is None:
            result[key] = deepcopy(value)
        elif isinstance(current, dict):
            if not isinstance(value, dict):
                raise _conflict(path, current, value)
            _merge_into(current, value, f"{path}.")
        elif isinstance(value, list) or type(current) is type(value):
            result[key] = deepcopy(value)
        else:
            raise _conflict(path, current, value)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Realiza um deep-merge determinístico entre dois dicionários de configuração.

    A base é copiada uma única vez e os overrides são aplicados sobre a
    cópia; nenhum dos inputs é alterado.

    Args:
        base (Dict[str, Any]): Configuração base (ex.: `DEFAULT_CONFIG`).
        override (Dict[str, Any]): Overrides explícitos.

    Returns:
        Dict[str, Any]: Nova configuração resultante do deep-merge.

    Raises:
        ConfigTypeConflictError: Se ocorrer conflito de tipo entre base e override.
    """
    if not isinstance(base, dict) or not isinstance(override, dict):
        raise ConfigTypeConflictError(
            f"Deep-merge requer dicts no nível raiz, recebido: "
            f"{type(base).__name__} vs {type(override).__name__}"
        )

    result = deepcopy(base)
    _merge_into(result, override, "")
    return result
