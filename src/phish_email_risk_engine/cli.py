"""Command-line runner: read one message, print its analysis as JSON."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Sequence, TextIO

from phish_email_risk_engine.config.settings import load_config
from phish_email_risk_engine.domain.email.parse import parse_input_payload
from phish_email_risk_engine.orchestrator.pipeline import analyze_message

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="phish-email-risk")
    parser.add_argument(
        "--input",
        default="-",
        help="Message as a JSON object or raw .eml file; '-' reads stdin.",
    )
    parser.add_argument("--profile", help="Scoring profile from the config file, e.g. strict.")
    parser.add_argument("--config", help="Path to a scoring config yaml.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level.",
    )
    return parser


def _read_input(source: str, stdin: TextIO) -> str:
    if source == "-":
        return stdin.read()
    return Path(source).read_text(encoding="utf-8", errors="ignore")


def run_once(raw: str, *, profile: str | None = None, config_path: str | None = None) -> str:
    cfg, _ = load_config(config_path, profile_override=profile)
    message = parse_input_payload(raw)
    result = analyze_message(message, cfg)
    return json.dumps(result.to_payload(), ensure_ascii=True)


def main(argv: Sequence[str] | None = None, *, stdin: TextIO | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")
    try:
        raw = _read_input(args.input, stdin or sys.stdin)
        print(run_once(raw, profile=args.profile, config_path=args.config))
    except (OSError, ValueError) as exc:
        logger.error("analysis could not run: %s", exc)
        print(json.dumps({"status": "error", "message": str(exc)}, ensure_ascii=True))
        return 1
    return 0
