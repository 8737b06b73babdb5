"""Module entrypoint for ``python -m filesteward``.

All argument parsing and command dispatch happen in ``filesteward.cli``.
"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
