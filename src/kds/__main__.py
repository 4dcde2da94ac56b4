"""Entry point for `python -m kds`."""

import sys

from kds.app import main

if __name__ == "__main__":
    sys.exit(main())
