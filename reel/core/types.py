"""Shared type aliases and the symbol alphabet."""
from __future__ import annotations

import string
from typing import Callable, TypeAlias

ALPHABET: tuple[str, ...] = tuple(string.ascii_uppercase)
DEFAULT_SYMBOL = "A"

TokenProvider: TypeAlias = Callable[[], int]
