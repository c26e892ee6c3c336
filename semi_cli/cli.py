"""semi-cli entry point.

Declares the command tree and runs it::

    semi-cli create my-app
    semi-cli create "My App" ./apps/my-app --yarn --force
    semi-cli reinstall
"""

from __future__ import annotations

import sys
from collections.abc import Sequence

from . import __version__
from .commands.create import create
from .commands.reinstall import reinstall
from .config import Config
from .errors import SemiError
from .registry import Cli, Command, Flag, Positional
from .utils import print_error


def build_cli(config: Config) -> Cli:
    """Bind the command handlers to *config* and build the parser."""
    return Cli(
        [
            Command(
                "create",
                "Create a new Semi project.",
                lambda args: create(args, config),
                [
                    Positional(
                        "name",
                        required=True,
                        description="The name of a new Semi project.",
                    ),
                    Positional(
                        "path",
                        description="A custom path to the project folder.",
                    ),
                ],
                [
                    Flag(
                        "yarn",
                        alias="y",
                        default=False,
                        description="Force the usage of yarn as package manager.",
                    ),
                    Flag(
                        "force",
                        alias="f",
                        description=(
                            "Force the deletion of possible old contents of a folder "
                            "(without this flag user will be asked for permission)."
                        ),
                    ),
                ],
            ),
            Command(
                "reinstall",
                "Reinstall node_modules and regenerate lock files.",
                lambda args: reinstall(args, config),
            ),
        ],
        prog="semi-cli",
        description="Scaffolding for Semi full-stack projects.",
        version=__version__,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point for ``semi-cli`` and ``python -m semi_cli``."""
    cli = build_cli(Config.from_env())
    try:
        code = cli.run(argv)
    except SemiError as exc:
        print_error(f"Error: {exc}")
        code = exc.exit_code
    sys.exit(code)
