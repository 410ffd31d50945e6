#!/usr/bin/env python3
"""
Compute a realignment schedule from a JSON plan file.

Usage: python3 compute_plan.py [plan_file.json]

Reads a plan from the given JSON file (or uses the built-in demo plan when no
file is given) and prints the computed view as JSON to stdout. Diagnostics
go to stderr; set ZONESHIFT_LOG_LEVEL (default WARNING) to see more.

Security: This script only reads from the specified JSON file and writes
to stdout. It does not accept any code or commands as input.
"""

import json
import os
import sys

from loguru import logger

# Import zoneshift modules (assumes api/_python is in path or script is run from there)
from zoneshift.errors import PlanValidationError
from zoneshift.planner import compute_plan
from zoneshift.sample_plan import make_sample_plan
from zoneshift.serialization import parse_core_plan, view_to_dict

DEFAULT_LOG_LEVEL = "WARNING"


def setup_logger(level: str | None = None) -> None:
    """Send log records to stderr so stdout stays pure JSON."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        level=level or os.environ.get("ZONESHIFT_LOG_LEVEL", DEFAULT_LOG_LEVEL),
    )


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) > 1:
        print(json.dumps({"error": "Usage: compute_plan.py [plan_file.json]"}))
        return 1

    setup_logger()

    try:
        if args:
            with open(args[0]) as f:
                plan = parse_core_plan(json.load(f))
        else:
            plan = make_sample_plan()

        view = compute_plan(plan)
        print(json.dumps(view_to_dict(view)))
        return 0

    except FileNotFoundError:
        print(json.dumps({"error": f"Plan file not found: {args[0]}"}))
    except json.JSONDecodeError as e:
        print(json.dumps({"error": f"Invalid JSON in plan file: {e}"}))
    except PlanValidationError as e:
        print(json.dumps({"error": "Invalid plan", "details": e.errors}))
    except Exception as e:
        print(json.dumps({"error": f"Plan computation failed: {e}"}))
    return 1


if __name__ == "__main__":
    sys.exit(main())
