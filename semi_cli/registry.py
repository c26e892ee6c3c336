"""Declarative command registration on top of ``argparse``.

A command line is described as a tree of :class:`Command` leaves and
:class:`CommandGroup` namespaces.  :class:`Cli` walks the tree once, builds a
nested ``argparse`` parser from it and routes each invocation to exactly one
handler.

Usage::

    cli = Cli(
        [
            Command(
                "create",
                "Create a new project.",
                handle_create,
                [Positional("name", required=True), Positional("path")],
                [Flag("force", alias="f", type="boolean")],
            ),
            CommandGroup("db", "Database helpers.", [Command("seed", "Seed.", seed)]),
        ],
        prog="semi-cli",
        version="0.1.0",
    )
    sys.exit(cli.run())
"""

from __future__ import annotations

import argparse
import asyncio
import inspect
import sys
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from typing import Any, Literal, Union

ValueType = Literal["string", "number", "boolean"]
Handler = Callable[[dict[str, Any]], Any]

# Namespace attributes used for routing; never handed to handlers.
_NODE_KEY = "_semi_node"
_SCOPE_KEY = "_semi_scope"


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Positional:
    """A value identified by its position on the command line."""

    name: str
    required: bool = False
    type: ValueType = "string"
    description: str = ""


@dataclass(frozen=True)
class Flag:
    """A named option such as ``--yarn`` / ``-y``.

    ``default=None`` leaves the value unset when the flag is absent, so a
    boolean flag can tell "not given" from ``--no-<name>``.
    """

    name: str
    alias: str | None = None
    type: ValueType = "boolean"
    default: Any = None
    description: str = ""


@dataclass(frozen=True)
class Command:
    """A leaf command bound to a handler."""

    name: str
    description: str
    handler: Handler
    positionals: tuple[Positional, ...] = ()
    flags: tuple[Flag, ...] = ()

    def __post_init__(self) -> None:
        positionals = normalize_required(_as_tuple(self.positionals))
        object.__setattr__(self, "positionals", positionals)
        object.__setattr__(self, "flags", _as_tuple(self.flags))

    @property
    def usage(self) -> str:
        """Command name followed by its positional fragment, e.g. ``create <name> [path]``."""
        fragment = format_positionals(self.positionals)
        return f"{self.name} {fragment}" if fragment else self.name


@dataclass(frozen=True)
class CommandGroup:
    """A namespace that only routes to its children."""

    name: str
    description: str
    children: tuple[Node, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", _as_tuple(self.children))


Node = Union[Command, CommandGroup]


def _as_tuple(value: Any) -> tuple:
    """Accept a single descriptor or a sequence of them."""
    if isinstance(value, (Positional, Flag, Command, CommandGroup)):
        return (value,)
    return tuple(value)


def normalize_required(positionals: Sequence[Positional]) -> tuple[Positional, ...]:
    """Make the required positionals a contiguous prefix.

    Everything up to and including the last positional marked required
    becomes required; everything after it becomes optional.
    """
    last_required = -1
    for index, positional in enumerate(positionals):
        if positional.required:
            last_required = index
    return tuple(
        replace(positional, required=index <= last_required)
        for index, positional in enumerate(positionals)
    )


def format_positional(positional: Positional) -> str:
    return f"<{positional.name}>" if positional.required else f"[{positional.name}]"


def format_positionals(positionals: Sequence[Positional]) -> str:
    """Render ``<required> [optional]`` in declared order."""
    return " ".join(format_positional(p) for p in positionals)


# ---------------------------------------------------------------------------
# Value conversion
# ---------------------------------------------------------------------------


def number(value: str) -> int | float:
    """Parse an integer when possible, otherwise a float."""
    try:
        return int(value)
    except ValueError:
        return float(value)


def boolean(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("true", "yes", "1"):
        return True
    if lowered in ("false", "no", "0"):
        return False
    raise ValueError(value)


_CONVERTERS: dict[str, Callable[[str], Any]] = {
    "string": str,
    "number": number,
    "boolean": boolean,
}


# ---------------------------------------------------------------------------
# Cli
# ---------------------------------------------------------------------------


class Cli:
    """Builds an ``argparse`` parser from a command tree and dispatches to it."""

    def __init__(
        self,
        nodes: Node | Sequence[Node],
        prog: str | None = None,
        description: str | None = None,
        version: str | None = None,
    ) -> None:
        self.nodes: tuple[Node, ...] = _as_tuple(nodes)
        self.parser = argparse.ArgumentParser(prog=prog, description=description)
        if version is not None:
            self.parser.add_argument("--version", action="version", version=version)
        self.parser.set_defaults(**{_NODE_KEY: None, _SCOPE_KEY: self.parser})
        self._add_nodes(self.nodes, self.parser)

    # -- Parser construction -----------------------------------------------

    def _add_nodes(self, nodes: Sequence[Node], parser: argparse.ArgumentParser) -> None:
        subparsers = parser.add_subparsers(title="commands", metavar="<command>")
        for node in nodes:
            if isinstance(node, Command):
                self._add_command(node, subparsers)
            else:
                group_parser = subparsers.add_parser(
                    node.name, help=node.description, description=node.description
                )
                group_parser.set_defaults(**{_NODE_KEY: node, _SCOPE_KEY: group_parser})
                self._add_nodes(node.children, group_parser)

    def _add_command(self, command: Command, subparsers: Any) -> None:
        usage = " ".join(
            part for part in ("%(prog)s", format_positionals(command.positionals), "[options]") if part
        )
        parser = subparsers.add_parser(
            command.name,
            help=command.description,
            description=command.description,
            usage=usage,
        )
        for positional in command.positionals:
            parser.add_argument(
                positional.name,
                nargs=None if positional.required else "?",
                type=_CONVERTERS[positional.type],
                help=positional.description,
            )
        for flag in command.flags:
            names = [f"--{flag.name}"]
            if flag.alias:
                names.append(f"-{flag.alias}")
            if flag.type == "boolean":
                parser.add_argument(
                    *names,
                    dest=flag.name,
                    action=argparse.BooleanOptionalAction,
                    default=flag.default,
                    help=flag.description,
                )
            else:
                parser.add_argument(
                    *names,
                    dest=flag.name,
                    type=_CONVERTERS[flag.type],
                    default=flag.default,
                    help=flag.description,
                )
        parser.set_defaults(**{_NODE_KEY: command, _SCOPE_KEY: parser})

    # -- Dispatch ----------------------------------------------------------

    def run(self, argv: Sequence[str] | None = None) -> int:
        """Parse *argv* (defaults to ``sys.argv[1:]``) and invoke one handler.

        Returns:
            The process exit code.  Parse errors, ``--help`` and ``--version``
            return the code argparse exits with.
        """
        argv = list(sys.argv[1:] if argv is None else argv)
        if not argv:
            self.parser.print_help()
            return 0

        try:
            namespace = self.parser.parse_args(argv)
        except SystemExit as exc:
            return exc.code if isinstance(exc.code, int) else 0

        values = vars(namespace)
        node = values.pop(_NODE_KEY)
        scope: argparse.ArgumentParser = values.pop(_SCOPE_KEY)
        if not isinstance(node, Command):
            scope.print_help()
            return 0

        result = node.handler(values)
        if inspect.iscoroutine(result):
            result = asyncio.run(result)
        return result if isinstance(result, int) and not isinstance(result, bool) else 0
