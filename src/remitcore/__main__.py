# src/remitcore/__main__.py
"""Allow ``python -m remitcore``."""

from remitcore.app import main

if __name__ == "__main__":
    main()
