"""Entry point for ``python -m mediatr_lint``."""

import sys

from mediatr_lint.main import main

if __name__ == "__main__":
    sys.exit(main())
