"""Entry point for `python -m peqtune`."""
import sys

from peqtune.cli import main


if __name__ == "__main__":
    sys.exit(main())
