"""CLI entrypoint for phish_email_risk_engine."""

from __future__ import annotations

from phish_email_risk_engine.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
