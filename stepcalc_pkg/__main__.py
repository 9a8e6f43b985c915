"""Main entry point for running stepcalc_pkg as a module.

This allows running Stepcalc with:
    python -m stepcalc_pkg
    python -m stepcalc_pkg --health-check
    python -m stepcalc_pkg -e "2+2"
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
