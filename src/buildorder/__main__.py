"""Allow ``python -m buildorder``."""

import sys

from buildorder.cli import main

if __name__ == "__main__":
    sys.exit(main())
