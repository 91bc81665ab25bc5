#!/usr/bin/env python3
# ruff: noqa: E402
import os
import sys


# Add project root to sys.path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from hexdiff.cli import main


if __name__ == "__main__":
    sys.exit(main())
