"""Allow ``python -m scriptree``."""

from .main import main

if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
