"""``semi-cli create <name> [path]`` -- scaffold a new Semi project."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from ..config import Config
from ..errors import ScaffoldError
from ..prompts import AskBool, ask_bool
from ..scaffolder import ProjectConfig, ProjectGenerator
from ..utils import print_success


async def create(args: dict[str, Any], config: Config, ask: AskBool = ask_bool) -> int:
    """Create a project from parsed ``create`` arguments.

    Expects the keys ``name``, ``path``, ``yarn`` and ``force``.
    """
    try:
        project = ProjectConfig(
            name=args["name"],
            path=args.get("path"),
            force=args.get("force"),
            force_yarn=bool(args.get("yarn")),
            cwd=config.cwd,
        )
    except ValidationError as exc:
        raise ScaffoldError(f"Invalid project name {args['name']!r}") from exc

    root = await ProjectGenerator(project, config, ask=ask).generate()
    print_success(f"Project {project.slug} created in {root}")
    return 0
