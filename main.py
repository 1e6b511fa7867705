#!/usr/bin/env python3
"""Main entry point for the Intel HEX analyzer.

Usage:
    # Analyze hex_file.hex in the current directory
    uv run python main.py

    # Or a given file, without the record listing
    uv run python main.py firmware.hex --no-records

    # Write a JSON report as well
    uv run python main.py firmware.hex --json report.json -v
"""

import sys
from pathlib import Path

# Add src to path for local development
sys.path.insert(0, str(Path(__file__).parent / "src"))

from ihex_analyzer.runner import main

if __name__ == "__main__":
    sys.exit(main())
