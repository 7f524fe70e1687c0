#!/usr/bin/env python3
"""PomoTimer — entry point.

Run with:
    python main.py status
    python -m pomotimer status
"""

import sys

from pomotimer.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
