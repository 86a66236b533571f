from __future__ import annotations

# Purpose: Report approved treatment plans found in TomoTherapy patient archives.
# Date: 2026-10-19
# Related tests: tests/test_find_plans.py

"""Command-line workflow for locating approved plans in a patient archive."""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Any, Sequence

import yaml

from tomo_archive import ArchiveError, filter_approved_plans, load_archive, parse_brief_plans
from tomo_archive.plans import find_brief_plans

logger = logging.getLogger(__name__)

CONFIG_PATH: Path = Path(__file__).parent / "config.yaml"
LOG_LEVELS = ("error", "warning", "info", "debug")
DEFAULT_CONFIG: dict[str, Any] = {
    "log_level": "info",
    "log_file": None,
}


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load CLI defaults from a YAML file, falling back to built-in values.

    Args:
        path: Location of the YAML config. Defaults to ``CONFIG_PATH``.

    Returns:
        dict[str, Any]: Merged configuration values.

    Raises:
        ValueError: If the file does not contain a YAML mapping.
    """
    config_path = path or CONFIG_PATH
    config = dict(DEFAULT_CONFIG)
    if not config_path.exists():
        logger.debug("Config file %s not found; using defaults.", config_path)
        return config

    with open(config_path, "r", encoding="utf-8") as f:
        loaded = yaml.safe_load(f)
    if loaded is None:
        return config
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    config.update(loaded)
    return config


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for the plan lookup."""
    parser = argparse.ArgumentParser(
        description="List approved Helical patient plans in a TomoTherapy patient archive."
    )
    parser.add_argument("path", type=Path, help="Directory containing the patient archive.")
    parser.add_argument("name", help="File name of the patient archive XML, e.g. Anon_0001_patient.xml.")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        help="Logging verbosity. Overrides the config file; 'debug' also logs plan UIDs.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Optional file path to write logs. When omitted, logs emit to the console.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML file with default settings (defaults to config.yaml beside this script).",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print every brief plan with its approval status instead of approved UIDs only.",
    )
    return parser.parse_args(argv)


def configure_logging(level_name: str, log_file: Path | None) -> None:
    """Configure logging outputs according to runtime preferences."""
    level = getattr(logging, level_name.upper(), logging.INFO)
    handlers: list[logging.Handler] = []
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    handlers.append(logging.StreamHandler())
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )


def find_plans(
    path: Path | str,
    name: str,
    *,
    logger: logging.Logger | None = None,
) -> list[str]:
    """Return the UIDs of approved Helical patient plans in an archive.

    Args:
        path: Directory holding the patient archive.
        name: File name of the patient archive XML.
        logger: Receives progress messages. Nothing is logged when ``None``.

    Returns:
        list[str]: Approved plan UIDs in document order; empty when none qualify.

    Raises:
        ArchiveParseError: If the archive cannot be read or parsed.
        PlanQueryError: If the plan query fails.
    """
    try:
        if logger:
            logger.info("Searching %s for approved plans", name)
        started = time.perf_counter()

        if logger:
            logger.debug("Loading file contents of %s", name)
        tree = load_archive(Path(path) / name)

        if logger:
            logger.info("%i plans found", len(find_brief_plans(tree)))

        plans = filter_approved_plans(tree)

        if not plans:
            if logger:
                logger.warning("No approved plans found in %s", name)
        elif logger:
            logger.info(
                "%i approved plans successfully identified in %0.3f seconds",
                len(plans),
                time.perf_counter() - started,
            )
            logger.debug("Approved plan UIDs: %s", ", ".join(plans))
        return plans
    except Exception:
        if logger:
            logger.exception("Failed to search %s for approved plans", name)
        raise


def _format_plan_row(record: dict[str, Any]) -> str:
    columns = (
        record.get("database_uid"),
        record.get("approved_plan_trial_uid"),
        record.get("plan_delivery_type"),
        record.get("type_of_plan"),
        "approved" if record.get("approved") else "-",
    )
    return "\t".join("" if value is None else str(value) for value in columns)


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for listing approved plans."""
    args = parse_args(argv)
    config = load_config(args.config)
    level_name = args.log_level or str(config.get("log_level") or "info")
    log_file = args.log_file
    if log_file is None and config.get("log_file"):
        log_file = Path(config["log_file"])
    configure_logging(level_name, log_file)
    logger.debug(
        "Logging configured: level=%s, destination=%s",
        level_name,
        log_file or "stdout",
    )

    try:
        if args.list:
            tree = load_archive(args.path / args.name)
            for record in parse_brief_plans(tree):
                print(_format_plan_row(dict(record)))
        else:
            for plan_uid in find_plans(args.path, args.name, logger=logger):
                print(plan_uid)
    except ArchiveError as exc:
        if args.list:
            logger.error("Unable to list plans in %s: %s", args.name, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
