"""
Entry point for module execution (``python -m britescript``).

This module delegates execution to the CLI handler in ``britescript.cli.__main__``.
"""

import sys
from britescript.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
