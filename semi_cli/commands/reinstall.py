"""``semi-cli reinstall`` -- rebuild ``node_modules`` and lock files."""

from __future__ import annotations

from typing import Any

from ..config import Config
from ..installer import PackageInstaller
from ..utils import print_success


async def reinstall(args: dict[str, Any], config: Config) -> int:
    await PackageInstaller(config).reinstall(config.cwd)
    print_success(f"Reinstalled dependencies in {config.cwd}")
    return 0
