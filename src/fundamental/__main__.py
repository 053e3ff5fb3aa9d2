"""Allow ``python -m fundamental``."""

from fundamental.cli import main

if __name__ == "__main__":
    main()
