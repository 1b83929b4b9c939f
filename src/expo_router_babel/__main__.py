"""
Entry point for module execution (``python -m expo_router_babel``).
"""

import sys

from expo_router_babel.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
