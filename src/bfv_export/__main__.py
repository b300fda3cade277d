from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from .config import AppConfig, load_config
from .pipeline import run

LOGGER = logging.getLogger("bfv_export")

DEFAULT_CONFIG_PATH = Path("bfv_export.yaml")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Exportiert BFV-Spielpläne als CSV, Excel, Kalender und Jira-Import."
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML-Konfiguration (Standard: bfv_export.yaml, falls vorhanden).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Ausführliche Debug-Ausgaben aktivieren.",
    )
    return parser


def resolve_config(path: Optional[Path]) -> AppConfig:
    if path is not None:
        return load_config(path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return AppConfig.default()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = resolve_config(args.config)
        run(config)
    except Exception:
        LOGGER.exception("Fataler Fehler")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
