"""Core primitives shared across all subsystems.

Enums, type aliases, the symbol alphabet and the error hierarchy live here so
that the machine, runtime and storage packages can import them without
introducing circular dependencies.
"""

from . import enums, errors, types

__all__ = ["enums", "errors", "types"]
