"""semi-cli configuration.

Typed settings shared by every command.  Built once by the CLI entry point
(usually through :meth:`Config.from_env`) and passed to the installer and the
project generator.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

PackageManager = Literal["npm", "yarn"]


def detect_package_manager(user_agent: str | None = None) -> PackageManager:
    """Return ``"yarn"`` when the CLI was launched through yarn, else ``"npm"``.

    Both npm and yarn export ``npm_config_user_agent`` to the scripts they
    run, e.g. ``yarn/1.22.19 npm/? node/v18.12.0 linux x64``.
    """
    if user_agent is None:
        user_agent = os.environ.get("npm_config_user_agent", "")
    return "yarn" if user_agent.startswith("yarn") else "npm"


class Config(BaseModel):
    """Global semi-cli configuration."""

    cwd: Path = Field(default_factory=Path.cwd, description="Directory commands resolve paths against")
    package_manager: PackageManager = Field(default_factory=detect_package_manager)
    install_timeout: int = Field(
        default=900, ge=30, description="Per-install process timeout in seconds"
    )
    cli_package: str = Field(default="@semi-framework/cli")

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            SEMI_CWD, SEMI_PACKAGE_MANAGER, SEMI_INSTALL_TIMEOUT,
            npm_config_user_agent.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SEMI_CWD"):
            kwargs["cwd"] = Path(os.environ["SEMI_CWD"])
        if os.environ.get("SEMI_PACKAGE_MANAGER"):
            kwargs["package_manager"] = os.environ["SEMI_PACKAGE_MANAGER"]
        if os.environ.get("SEMI_INSTALL_TIMEOUT"):
            kwargs["install_timeout"] = os.environ["SEMI_INSTALL_TIMEOUT"]
        return cls(**kwargs)
