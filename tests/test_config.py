"""Unit tests for Config (semi_cli.config).

Tests cover:
- Defaults and validation
- Package-manager detection from the npm user agent
- from_env overrides
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from semi_cli.config import Config, detect_package_manager


class TestDetectPackageManager:
    @pytest.mark.unit
    def test_yarn_user_agent(self):
        assert detect_package_manager("yarn/1.22.19 npm/? node/v18.12.0 linux x64") == "yarn"

    @pytest.mark.unit
    def test_npm_user_agent(self):
        assert detect_package_manager("npm/9.6.7 node/v20.3.1 darwin arm64") == "npm"

    @pytest.mark.unit
    def test_empty_user_agent(self):
        assert detect_package_manager("") == "npm"

    @pytest.mark.unit
    def test_reads_environment(self):
        with patch.dict("os.environ", {"npm_config_user_agent": "yarn/3.6.0"}):
            assert detect_package_manager() == "yarn"


class TestConfig:
    @pytest.mark.unit
    def test_defaults(self):
        with patch.dict("os.environ", {"npm_config_user_agent": ""}):
            config = Config()
        assert config.cwd == Path.cwd()
        assert config.package_manager == "npm"
        assert config.install_timeout == 900
        assert config.cli_package == "@semi-framework/cli"

    @pytest.mark.unit
    def test_invalid_package_manager_rejected(self):
        with pytest.raises(ValidationError):
            Config(package_manager="pnpm")

    @pytest.mark.unit
    def test_timeout_lower_bound(self):
        with pytest.raises(ValidationError):
            Config(install_timeout=5)


class TestFromEnv:
    @pytest.mark.unit
    def test_no_overrides(self):
        with patch.dict("os.environ", {"npm_config_user_agent": "npm/9"}, clear=True):
            config = Config.from_env()
        assert config.package_manager == "npm"
        assert config.install_timeout == 900

    @pytest.mark.unit
    def test_overrides(self, tmp_path: Path):
        env = {
            "SEMI_CWD": str(tmp_path),
            "SEMI_PACKAGE_MANAGER": "yarn",
            "SEMI_INSTALL_TIMEOUT": "120",
        }
        with patch.dict("os.environ", env, clear=True):
            config = Config.from_env()
        assert config.cwd == tmp_path
        assert config.package_manager == "yarn"
        assert config.install_timeout == 120

    @pytest.mark.unit
    def test_user_agent_used_without_override(self):
        with patch.dict("os.environ", {"npm_config_user_agent": "yarn/1.22.19"}, clear=True):
            assert Config.from_env().package_manager == "yarn"

    @pytest.mark.unit
    def test_invalid_override(self):
        with patch.dict("os.environ", {"SEMI_PACKAGE_MANAGER": "bun"}, clear=True):
            with pytest.raises(ValidationError):
                Config.from_env()

    @pytest.mark.unit
    def test_non_numeric_timeout(self):
        with patch.dict("os.environ", {"SEMI_INSTALL_TIMEOUT": "soon"}, clear=True):
            with pytest.raises(ValidationError):
                Config.from_env()
