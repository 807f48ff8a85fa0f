"""
Entry point for running setup as a module: python -m devsetup
"""

import sys

from devsetup.cli import main


if __name__ == "__main__":
    sys.exit(main())
