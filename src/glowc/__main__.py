"""Allow ``python -m glowc``."""

from glowc.ui.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
