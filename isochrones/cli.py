"""Command-line entry point.

Reads an isochrones request from a JSON file (or ``-`` for stdin), runs
it through the service and prints a JSON summary:

    python -m isochrones request.json --dry-run
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import get_config
from .container import Container
from .domain.errors import IsochronesError, RequestError
from .monitoring import configure_logging
from .services import IsochronesService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="isochrones",
        description="Validate a batch isochrones request and compute its isochrones.",
    )
    parser.add_argument("request", help="Path to the JSON request, '-' for stdin")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate only; use the null engine instead of Valhalla",
    )
    parser.add_argument("--log-level", default=None, help="Override ISO_LOG_LEVEL")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = get_config()
    configure_logging(config.observability, level=args.log_level)

    if args.request == "-":
        body = sys.stdin.read()
    else:
        try:
            body = Path(args.request).read_text(encoding="utf-8")
        except OSError as e:
            print(f"Cannot read request: {e}", file=sys.stderr)
            return 2

    container = Container.create_default(config, dry_run=args.dry_run)
    service: IsochronesService = container.resolve(IsochronesService)

    try:
        batch = service.prepare(body)
        isochrone_maps = service.compute(batch)
    except IsochronesError as e:
        print(json.dumps({"error": _error_body(e)}), file=sys.stderr)
        return 1

    summary: Dict[str, Any] = {
        "id": batch.id,
        "calc_method": batch.calc_method.value,
        "travellers": [traveller.to_dict() for traveller in batch.travellers],
        "isochrones": [
            {
                "traveller_id": m.traveller_id,
                "empty": m.is_empty,
                "features": len(m.features),
            }
            for m in isochrone_maps
        ],
    }
    print(json.dumps(summary, indent=2))
    return 0


def _error_body(error: IsochronesError) -> Dict[str, Any]:
    if isinstance(error, RequestError):
        return error.to_dict()
    logger.error("Isochrone computation failed", extra={"error": str(error)})
    return {"message": error.message}
