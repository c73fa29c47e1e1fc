from __future__ import annotations

import argparse
import asyncio
import os
import signal
import sys
from pathlib import Path
from typing import Sequence

from reel.config.loader import load_app_settings_or_default
from reel.config.models import AppSettings
from reel.runtime.session import ReelSession
from reel.storage.store import ConfigHistoryStore
from reel.telemetry import configure_logging, get_logger


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="letter-reel", description="Spin the letter reel.")
    parser.add_argument("--settings", type=Path, default=None, help="Path to reel.yml")
    parser.add_argument("--spins", type=int, default=1, help="Number of runs to perform")
    return parser.parse_args(argv)


def _resolve_settings_path(explicit: Path | None, config_dir: Path) -> Path | None:
    if explicit is not None:
        return explicit
    env_path = os.environ.get("REEL_SETTINGS_PATH")
    if env_path:
        return Path(env_path)
    candidate = config_dir / "reel.yml"
    if candidate.exists():
        return candidate
    return None


async def run_spins(settings: AppSettings, root: Path, spins: int) -> list[str]:
    loop = asyncio.get_running_loop()
    store = ConfigHistoryStore(root / settings.storage_dir)
    session = ReelSession.from_store(store, loop=loop, frame_interval=settings.frame_interval_sec)
    logger = get_logger("main")

    stopping = False

    def _request_stop() -> None:
        nonlocal stopping
        logger.info("Stop requested")
        stopping = True
        session.stop()

    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, _request_stop)
        except (NotImplementedError, RuntimeError):  # pragma: no cover - platform specific
            pass

    results: list[str] = []
    try:
        for _ in range(max(0, spins)):
            if stopping:
                break
            symbol = await session.spin()
            if symbol is None:
                break
            results.append(symbol)
            print(symbol, flush=True)
    finally:
        session.close()
    return results


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    project_root = Path.cwd()
    settings_path = _resolve_settings_path(args.settings, project_root / "config")
    settings = load_app_settings_or_default(settings_path)

    logger = configure_logging(
        log_dir=(project_root / settings.logging.log_dir).resolve(),
        level=settings.logging.level,
        console=False,
    )
    logger.info("Bootstrapping reel", extra={"settings_path": str(settings_path) if settings_path else None})
    asyncio.run(run_spins(settings, project_root, args.spins))
    logger.info("Shutdown complete")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - top-level safety
        print(f"Fatal error: {exc}", file=sys.stderr)
        raise
