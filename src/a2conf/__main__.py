"""Entry point for running with python -m a2conf."""

from a2conf.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
