"""Allow running the CLI with ``python -m pivnet``."""

from pivnet.cli.app import main

if __name__ == "__main__":
    main()
