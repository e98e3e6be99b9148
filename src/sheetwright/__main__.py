"""Allow ``python -m sheetwright``."""

from sheetwright.cli import run

if __name__ == "__main__":
    run()
