#!/usr/bin/env python3
"""
Elf Invaders - Main Entry Point
===============================

Runs the game from a source checkout without installing it:

    python main.py
    python main.py --seed 42 --offline

See elf_invaders/cli.py (or --help) for every option.
"""

import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from elf_invaders.cli import main


if __name__ == "__main__":
    main()
