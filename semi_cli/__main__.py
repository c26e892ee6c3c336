"""Allow ``python -m semi_cli``."""

from semi_cli.cli import main

if __name__ == "__main__":
    main()
