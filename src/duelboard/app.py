"""Application entry point."""

from __future__ import annotations

import sys


def main() -> None:
    """Launch the duelboard application."""
    from duelboard.ui.bootstrap import configure_logging, run_application

    configure_logging()
    sys.exit(run_application())


if __name__ == "__main__":
    main()
