"""History-aware choice of the final symbol."""
from __future__ import annotations

import random
from typing import Sequence


def random_symbol(alphabet: Sequence[str], rng: random.Random | None = None) -> str:
    """Uniform draw from ``alphabet``."""

    if not alphabet:
        raise ValueError("random_symbol: cannot pick from an empty alphabet")
    return (rng or random).choice(list(alphabet))


def trim_history(history: Sequence[str], history_size: int) -> tuple[str, ...]:
    """Keep the ``history_size`` most recent entries, dropping from the front."""

    if history_size <= 0:
        return ()
    if len(history) <= history_size:
        return tuple(history)
    return tuple(history[len(history) - history_size :])


def select_final(
    alphabet: Sequence[str],
    recent: Sequence[str],
    rng: random.Random | None = None,
) -> str:
    """Pick a symbol not in ``recent``.

    When ``recent`` already covers the whole alphabet the constraint is relaxed
    and any symbol may be drawn.
    """

    recent_set = set(recent)
    pool = [symbol for symbol in alphabet if symbol not in recent_set]
    return random_symbol(pool or alphabet, rng)


__all__ = ["random_symbol", "select_final", "trim_history"]
