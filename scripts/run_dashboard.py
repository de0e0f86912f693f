"""Periodically fetch, compose and write the dashboard frame."""

from __future__ import annotations

import argparse
import asyncio
from datetime import datetime
import logging
from pathlib import Path
import sys
import time
from zoneinfo import ZoneInfo

from kindle_dash.config import AppConfig, LoggingConfig, load_config
from kindle_dash.data.orchestrator import build_snapshot
from kindle_dash.data.sources import build_sources, fetch_executor
from kindle_dash.rendering import compose_dashboard, prepare_for_device, save_frame

logger = logging.getLogger("kindle_dash")


def _configure_logging(config: LoggingConfig) -> None:
    log_dir = Path(config.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=config.level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_dir / "dashboard.log", encoding="utf-8"),
        ],
    )


def render_once(config: AppConfig, output: str) -> Path:
    started = time.perf_counter()
    now = datetime.now(ZoneInfo(config.display.timezone))

    with fetch_executor() as executor:
        sources = build_sources(config.sources, now, executor)
        snapshot = asyncio.run(build_snapshot(sources, config.sources.timeout_seconds, now))

    image = compose_dashboard(snapshot, now)
    frame = prepare_for_device(
        image,
        config.display.width,
        config.display.height,
        rotate=config.display.rotate,
    )
    path = save_frame(frame, output)
    logger.info("Finished in %.2fs: %s", time.perf_counter() - started, path)
    return path


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", default="config/config.yaml")
    parser.add_argument("--output", default=None, help="Override display.output_path")
    parser.add_argument("--once", action="store_true", help="Render a single frame and exit")
    args = parser.parse_args()

    config = load_config(args.config)
    _configure_logging(config.log)
    output = args.output or config.display.output_path

    try:
        while True:
            try:
                render_once(config, output)
            except Exception:
                logger.exception("Render cycle failed")
                if args.once:
                    return 1
            if args.once:
                return 0
            time.sleep(config.display.refresh_minutes * 60)
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
