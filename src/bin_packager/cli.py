from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from bin_packager.config import LOG_LEVELS, configure_logging, load_settings
from bin_packager.errors import PackingError
from bin_packager.io.schemas import PackingResultSchema
from bin_packager.io.serialize import dump_result, load_request, pack_request
from bin_packager.packing.heuristics import Heuristic

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="3D bin packer CLI")
    parser.add_argument("--input", required=True, help="Input request JSON file (bins, items, heuristic)")
    parser.add_argument("--output", help="Output result JSON file; printed to stdout if omitted")
    parser.add_argument(
        "--heuristic",
        choices=[h.value for h in Heuristic],
        help="first_fit = insertion order, first_fit_decreasing = biggest volume first "
        "(overrides the request and BIN_PACKAGER_HEURISTIC)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Logging level (overrides BIN_PACKAGER_LOG_LEVEL)",
    )
    return parser


def print_summary(result: PackingResultSchema) -> None:
    for b in result.bins:
        fitted_ids = [i.id for i in b.fitted_items]
        print(f"📦 BIN {b.id}: {b.dimension[0]} x {b.dimension[1]} x {b.dimension[2]}")
        print("  ✅ Fitted :", fitted_ids if fitted_ids else "(none)")
        print(f"  Fill rate: {b.fill_rate * 100:.2f}%  Weight: {b.total_weight:.2f}/{b.max_weight:.2f}")

    unfitted_ids = [i.id for i in result.unfitted_items]
    print("❌ Unfitted :", unfitted_ids if unfitted_ids else "(none)")
    print(f"📊 Fill rate of used bins: {result.fill_rate * 100:.2f}%")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    configure_logging(args.log_level if args.log_level else settings.log_level)

    try:
        request = load_request(Path(args.input))
        if args.heuristic:
            request.heuristic = Heuristic(args.heuristic)
        result = pack_request(request, default_heuristic=settings.heuristic)
    except (PackingError, ValidationError, ValueError, OSError) as e:
        logger.error(f"Invalid input {args.input}: {e}")
        return 2

    try:
        text = dump_result(result, Path(args.output) if args.output else None)
    except OSError as e:
        logger.error(f"Cannot write result to {args.output}: {e}")
        return 2

    if args.output:
        print_summary(result)
        print(f"✅ Result written to {Path(args.output).resolve()}")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
