"""CLI: Run AutoMod checks on a Quaver map.

Usage:
    python scripts/automod.py map.qua
    python scripts/automod.py map.qua --config configs/automod.yaml --json
    python scripts/automod.py map.qua --set overlapping_objects_threshold=12 -v

Exit status is 1 when a critical issue was found, 2 when the map or config
could not be loaded.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from quaver_automod.automod import (
    AutoMod,
    ConfigError,
    InvalidLaneError,
    is_reportable,
    issue_to_dict,
    load_config,
)
from quaver_automod.data.qua import QuaParseError, parse_qua

logger = logging.getLogger(__name__)


def main() -> int:
    """Entry point for the AutoMod CLI."""
    parser = argparse.ArgumentParser(
        description="Check a Quaver .qua map for common mapping issues",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("map", type=Path, help="Input .qua file")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML file with AutoMod thresholds (built-in defaults if not set)",
    )
    parser.add_argument(
        "--set",
        action="append",
        default=[],
        dest="overrides",
        metavar="KEY=VALUE",
        help="Override a threshold, e.g. --set short_long_note_threshold=40",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="as_json",
        help="Print issues as a JSON document",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        config = load_config(args.config, args.overrides)
        qua = parse_qua(args.map)
    except (ConfigError, QuaParseError) as e:
        logger.error("%s", e)
        return 2

    automod = AutoMod(qua, config)
    try:
        automod.run()
    except InvalidLaneError as e:
        logger.error("%s", e)
        return 2

    issues = [issue for issue in automod.issues if is_reportable(issue)]

    if args.as_json:
        report = {
            "map": str(args.map),
            "title": qua.title,
            "difficulty": qua.difficulty_name,
            "issues": [issue_to_dict(issue) for issue in issues],
        }
        print(json.dumps(report, indent=2))
    else:
        for issue in issues:
            print(f"[{issue.level.value}] {issue.issue_type.value}: {issue.text}")
        print(f"{len(issues)} issue(s) found in {args.map.name}")

    return 1 if automod.has_critical_issues else 0


if __name__ == "__main__":
    sys.exit(main())
