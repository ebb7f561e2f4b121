"""Allow ``python -m tinystringer``."""

import sys

from tinystringer.main import main

if __name__ == "__main__":
    sys.exit(main())
