"""Command line entry point for the HTTP service."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from .states import States
from .web import WebApp, serve


def _records(path: str | Path) -> list[dict[str, Any]]:
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON list of records")
    return data


def load_states(complexes_path, equipment_path, outages_path, entrances_path) -> States:
    """Build the service state from four JSON files of records."""
    return States(
        _records(complexes_path),
        _records(equipment_path),
        _records(outages_path),
        _records(entrances_path),
    )


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="subpar", description="Serve subway complex data over HTTP.")
    parser.add_argument("--complexes", required=True, help="JSON file of station complexes")
    parser.add_argument("--equipment", required=True, help="JSON file of elevators and escalators")
    parser.add_argument("--outages", required=True, help="JSON file of equipment outages")
    parser.add_argument("--entrances", required=True, help="JSON file of subway entrances")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=3000)
    parser.add_argument("--ui-dir", default="ui")
    parser.add_argument("--allow-origin", default=None, help="origin allowed by CORS")
    return parser


def main(argv=None) -> int:
    args = _parser().parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    try:
        states = load_states(args.complexes, args.equipment, args.outages, args.entrances)
    except (OSError, ValueError, KeyError) as exc:
        print(f"subpar: cannot load data: {exc}", file=sys.stderr)
        return 1
    if args.allow_origin is not None:
        WebApp.allowed_origin = args.allow_origin
    try:
        serve(states, args.host, args.port, args.ui_dir)
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())