"""
Module execution entry point.

Allows running with: python -m smtree_cli
"""

import sys
from smtree_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
