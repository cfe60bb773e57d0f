"""
Main entry point for riftimpact.
"""

import sys

from riftimpact.cli import main

if __name__ == "__main__":
    sys.exit(main())
