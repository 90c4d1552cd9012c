#!/usr/bin/env python3
"""Local CLI entrypoint to verify package bundles from a source checkout.

Usage:
  python scripts/verify.py [--config settings.json] [--strict-dimensions] FILES...

This calls the same verify_packages used by the installed `aix-validator`
command.
"""

from __future__ import annotations

from aix_validator.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
