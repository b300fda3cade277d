#!/usr/bin/env python3
"""Hilfsprogramm zum Neuerzeugen der index.html eines Exportverzeichnisses."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path


def _add_src_to_path() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    if str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Listet alle Exportdateien eines Verzeichnisses nach Dateityp und "
            "Mannschaft gruppiert in einer index.html auf."
        ),
    )
    parser.add_argument(
        "directory",
        type=Path,
        nargs="?",
        default=Path("exports"),
        help="Exportverzeichnis (Standard: exports).",
    )
    parser.add_argument(
        "--title",
        default=None,
        help="Überschrift der Seite (Standard: BFV Exports).",
    )
    return parser


def main() -> int:
    _add_src_to_path()
    from bfv_export import index

    parser = build_parser()
    args = parser.parse_args()

    if not args.directory.is_dir():
        print(f"Verzeichnis {args.directory} existiert nicht.", file=sys.stderr)
        return 1

    path = index.write_index(args.directory, title=args.title or index.DEFAULT_INDEX_TITLE)
    print("Index aktualisiert:", path)
    return 0


if __name__ == "__main__":  # pragma: no cover - manuelle Ausführung
    raise SystemExit(main())
