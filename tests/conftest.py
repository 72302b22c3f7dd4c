# tests/conftest.py
"""
Fixtures compartilhados para testes do Loom DataFlow.

Este módulo define fixtures reutilizáveis que fornecem:
- configurações mínimas e determinísticas do engine
- contexto de execução controlado (RunContext)
- settings parametrizados por modo de execução (serial / threads)

Decisões arquiteturais:
    - Fixtures são mantidas simples e explícitas
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas
    - A matriz de modos cobre contagens de workers menores, iguais e
      maiores que o tamanho típico das coleções de teste

Invariantes:
    - Nenhuma fixture realiza I/O
    - Todo resultado esperado é o mesmo em qualquer modo da matriz

Limites explícitos:
    - Não substituir testes de integração
    - Não conter lógica condicional complexa
"""

import pytest


# =====================================================
# Config fixtures
# =====================================================

@pytest.fixture
def project_like_config_defaults_yaml() -> str:
    """
    YAML de defaults semelhante ao `config.defaults.yaml` de um projeto.

    Usado por:
        - Testes do loader de config
        - Testes de deep-merge (defaults + local)

    Returns:
        str: Conteúdo YAML com a seção `engine` completa.
    """
    return """\
engine:
  mode: threads
  workers: 4
  min_chunk_size: 2
"""


@pytest.fixture
def project_like_config_local_yaml() -> str:
    """
    YAML de overrides locais (`config.local.yaml`).

    Representa apenas overrides: não contém a configuração completa.

    Returns:
        str: Conteúdo YAML de override.
    """
    return """\
engine:
  workers: 2
"""


@pytest.fixture
def dummy_config() -> dict:
    """
    Configuração mínima e já resolvida, com execução paralela em 3 workers.

    Returns:
        dict: Configuração válida para `EngineSettings.from_config`.
    """
    return {"engine": {"mode": "threads", "workers": 3, "min_chunk_size": 1}}


# =====================================================
# RunContext / EngineSettings fixtures
# =====================================================

@pytest.fixture
def dummy_ctx(dummy_config):
    """
    RunContext determinístico para testes.

    Decisões arquiteturais:
        - `run_id` fixo para asserts sobre eventos
        - Config injetada explicitamente via fixture

    Returns:
        RunContext: Contexto isolado, sem eventos prévios.
    """
    from loom_dataflow.core.run_context import RunContext

    return RunContext.create(config=dummy_config, run_id="run-test-001")


EXECUTOR_MATRIX = [
    {"mode": "serial", "workers": 1, "min_chunk_size": 1},
    {"mode": "threads", "workers": 2, "min_chunk_size": 1},
    {"mode": "threads", "workers": 3, "min_chunk_size": 1},
    {"mode": "threads", "workers": 8, "min_chunk_size": 1},
    {"mode": "threads", "workers": 4, "min_chunk_size": 3},
]


@pytest.fixture(
    params=EXECUTOR_MATRIX,
    ids=lambda p: f"{p['mode']}-w{p['workers']}-c{p['min_chunk_size']}",
)
def engine_settings(request):
    """
    EngineSettings parametrizado sobre a matriz de modos de execução.

    Todo teste que usa este fixture roda uma vez por combinação, e deve
    produzir exatamente o mesmo resultado em todas.
    """
    from loom_dataflow.core.config.settings import EngineSettings

    return EngineSettings.from_config({"engine": dict(request.param)})


@pytest.fixture
def matrix_ctx(engine_settings):
    """RunContext cuja configuração corresponde ao `engine_settings` corrente."""
    from loom_dataflow.core.run_context import RunContext

    return RunContext.create(
        config={
            "engine": {
                "mode": engine_settings.mode.value,
                "workers": engine_settings.workers,
                "min_chunk_size": engine_settings.min_chunk_size,
            }
        },
        run_id="run-matrix",
    )
