"""Allow ``python -m ztarter_toolkit``."""

from ztarter_toolkit.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
