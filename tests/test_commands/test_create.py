"""Tests for the ``create`` command handler (semi_cli.commands.create)."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from semi_cli.commands.create import create
from semi_cli.errors import ScaffoldError

pytestmark = pytest.mark.unit


class TestCreate:
    @pytest.mark.asyncio
    async def test_builds_project_config(self, config, workspace, scripted_answers):
        ask = scripted_answers()
        with patch("semi_cli.commands.create.ProjectGenerator") as generator_cls:
            generator_cls.return_value.generate = AsyncMock(return_value=workspace / "my-app")
            code = await create(
                {"name": "My App", "path": None, "yarn": True, "force": False}, config, ask=ask
            )

        assert code == 0
        project, passed_config = generator_cls.call_args.args
        assert passed_config is config
        assert generator_cls.call_args.kwargs["ask"] is ask
        assert project.slug == "my-app"
        assert project.cwd == workspace
        assert project.force is False
        assert project.force_yarn is True

    @pytest.mark.asyncio
    async def test_unset_flags(self, config, workspace):
        with patch("semi_cli.commands.create.ProjectGenerator") as generator_cls:
            generator_cls.return_value.generate = AsyncMock(return_value=workspace / "x")
            await create({"name": "x", "path": "site", "yarn": False, "force": None}, config)

        project = generator_cls.call_args.args[0]
        assert project.force is None
        assert project.root_dir == workspace / "site"

    @pytest.mark.asyncio
    async def test_invalid_name(self, config):
        with pytest.raises(ScaffoldError, match="Invalid project name"):
            await create({"name": "???", "path": None, "yarn": False, "force": None}, config)

    @pytest.mark.asyncio
    async def test_end_to_end_with_fake_installs(self, config, workspace, scripted_answers):
        ask = scripted_answers(mongoose=False, redis=False)
        with patch(
            "semi_cli.installer.run_command", AsyncMock(return_value=(0, "", ""))
        ) as installs, patch(
            "semi_cli.scaffolder.generator.run_command", AsyncMock(return_value=(0, "", ""))
        ):
            code = await create(
                {"name": "demo", "path": None, "yarn": False, "force": None}, config, ask=ask
            )

        assert code == 0
        root = workspace / "demo"
        assert (root / "backend" / "src" / "express.ts").exists()
        commands = [c.args[0] for c in installs.await_args_list]
        assert commands[0] == ["npm", "install", "@semi-framework/cli", "-D"]
        assert ["npm", "install", "@semi-framework/node-auth"] in commands
        assert ["npm", "install", "mongoose"] not in commands
