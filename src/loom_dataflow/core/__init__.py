# src/loom_dataflow/core/__init__.py
"""
Core do Loom DataFlow.

Este pacote contém a implementação canônica do protocolo builder +
iteração, independente das operações nomeadas construídas sobre ele.

O core é projetado para ser:
    - determinístico (o resultado paralelo é idêntico ao serial)
    - testável de forma isolada
    - explícito quanto ao ciclo de vida dos builders

Componentes principais:
    - builders    → Appender, Merger, DictMerger e o contrato linear de uso
    - iteration   → construto `for` (entradas, planner de partições, engine)
    - config      → resolução de configuração (merge, hashing, settings)
    - run_context → log estruturado e warnings de um run

Limites explícitos:
    - Não define operações nomeadas (ver `loom_dataflow.ops`)
    - Não agenda trabalho fora de uma chamada ao construto `for`
"""
