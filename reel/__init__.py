"""Top-level package for the letter reel.

The package is split into a pure state machine (``reel.machine``), the
asyncio-driven run scheduler and session wiring (``reel.runtime``), the
JSON-file config/history store (``reel.storage``) and the ambient config and
logging layers. Subpackages stay import-safe for any runtime component.
"""

__all__: list[str] = []
