#!/usr/bin/env python3
"""
Main entry point for the playtime module.
This allows running the module with: python -m playtime
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
