# src/loom_dataflow/core/iteration/planner.py
"""
Planejador de partições do construto `for`.

Este módulo divide a faixa de índices `[0, length)` de uma iteração em
partições contíguas e disjuntas, que o engine executa em paralelo, cada
uma contra um builder privado.

Princípios fundamentais:
    - O plano depende apenas de (length, workers, min_chunk_size)
    - Partições são contíguas e aparecem em ordem crescente de índice
    - Nenhuma heurística implícita: o tamanho mínimo é configuração

Invariantes:
    - Todo índice aparece em exatamente uma partição
    - Nenhuma partição é vazia
    - O número de partições nunca excede `workers`
    - Os tamanhos diferem em no máximo 1 (as primeiras recebem o excedente)

Limites explícitos:
    - Não executa partições
    - Não conhece builders nem funções do usuário
"""

from __future__ import annotations

from typing import List, Tuple


Chunk = Tuple[int, int]


def plan_chunks(length: int, workers: int, min_chunk_size: int = 1) -> List[Chunk]:
    """
    Produz partições `(start, end)` determinísticas para `length` elementos.

    O número de partições é `min(workers, length // min_chunk_size)`, com
    mínimo de 1 quando `length > 0`. Uma coleção vazia não gera partições.

    Args:
        length (int): Número de elementos da iteração.
        workers (int): Número máximo de partições.
        min_chunk_size (int): Tamanho mínimo desejado de cada partição.

    Returns:
        List[Tuple[int, int]]: Faixas semiabertas em ordem crescente.

    Raises:
        ValueError: Se algum argumento for negativo ou não inteiro.
    """
    for name, value, minimum in (
        ("length", length, 0),
        ("workers", workers, 1),
        ("min_chunk_size", min_chunk_size, 1),
    ):
        if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
            raise ValueError(f"{name} must be an int >= {minimum}, got {value!r}")

    if length == 0:
        return []

    n_chunks = max(1, min(workers, length // min_chunk_size))
    base, extra = divmod(length, n_chunks)

    chunks: List[Chunk] = []
    start = 0
    for k in range(n_chunks):
        size = base + (1 if k < extra else 0)
        chunks.append((start, start + size))
        start += size

    return chunks
