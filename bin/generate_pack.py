#!/usr/bin/env python3
"""
Generic IDL Package Generator

Reads a resolved package description and generates one TypeScript
declaration module per package file.

Usage:
    python generate_pack.py package.json --output-dir generated/
"""

import sys
from pathlib import Path

# Add parent directory to path so packgen package can be found
sys.path.insert(0, str(Path(__file__).parent.parent))

from packgen.cli import main


if __name__ == "__main__":
    sys.exit(main())
