"""Optional backend modules (express, auth, mongoose, redis).

Each module installs its npm packages into the backend and renders its
TypeScript entry file from ``templates/backend/``.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from ..installer import PackageInstaller
from .templates import TemplateRenderer


class BackendModules:
    """Adds modules to a generated ``backend/`` directory.

    Args:
        backend_dir: The project's ``backend/`` directory.
        installer: Installer used for every package.
        renderer: Template renderer shared with the generator.
        context: Template context (``project_name``, ``auth`` ...).
    """

    def __init__(
        self,
        backend_dir: Path,
        installer: PackageInstaller,
        renderer: TemplateRenderer,
        context: dict[str, Any],
    ) -> None:
        self.backend_dir = backend_dir
        self.installer = installer
        self.renderer = renderer
        self.context = context

    @property
    def src_dir(self) -> Path:
        return self.backend_dir / "src"

    @property
    def component_dir(self) -> Path:
        return self.src_dir / "Components"

    async def semi(self) -> None:
        """Install the Semi runtime helpers."""
        await self.installer.install("@semi-framework/utils", self.backend_dir)

    async def express(self) -> Path:
        """Add an express web server and import it from ``index.ts``."""
        await self.installer.install("express cors", self.backend_dir)
        await self.installer.install("@types/express @types/cors", self.backend_dir, dev=True)

        path = await self.renderer.render_to_file(
            "backend/express.ts.j2", self.src_dir / "express.ts", self.context
        )
        await asyncio.to_thread(_append_line, self.src_dir / "index.ts", 'import "./express";')
        return path

    async def auth(self) -> Path:
        """Add the ``@semi-framework/node-auth`` authentication router."""
        await self.installer.install("@semi-framework/node-auth", self.backend_dir)
        return await self.renderer.render_to_file(
            "backend/auth.ts.j2", self.component_dir / "auth.ts", self.context
        )

    async def mongoose(self) -> Path:
        """Add a shared MongoDB connection."""
        await self.installer.install("mongoose", self.backend_dir)
        return await self.renderer.render_to_file(
            "backend/mongoose.ts.j2", self.component_dir / "mongoose.ts", self.context
        )

    async def redis(self) -> Path:
        """Add a shared Redis client."""
        await self.installer.install("ioredis", self.backend_dir)
        return await self.renderer.render_to_file(
            "backend/redis.ts.j2", self.component_dir / "redis.ts", self.context
        )


def _append_line(path: Path, line: str) -> None:
    with path.open("a", encoding="utf-8") as handle:
        handle.write(line + "\n")
