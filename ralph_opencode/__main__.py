"""Allow ``python -m ralph_opencode``."""

from ralph_opencode.cli import main

if __name__ == "__main__":
    main()
