"""Allow ``python -m snippetrag``."""

from snippetrag.cli import main

if __name__ == "__main__":
    main()
