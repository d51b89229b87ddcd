"""
Main entry point for the club configuration tool.
"""

import sys
from lmrc_config.cli import main

if __name__ == "__main__":
    sys.exit(main())
