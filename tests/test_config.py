"""Tests for configuration management."""

from pathlib import Path

import pytest
import yaml

from ide_mcp.validation.config import BridgeConfig, Config, ConfigError


class TestConfig:
    """Tests for Config class."""

    @pytest.fixture
    def isolated(self, tmp_path, monkeypatch):
        """No global config, cwd in an empty project."""
        monkeypatch.setattr(Config, "GLOBAL_CONFIG_DIR", tmp_path / "home" / ".ide-mcp")
        project = tmp_path / "project"
        project.mkdir()
        monkeypatch.chdir(project)
        return tmp_path

    def _write(self, path: Path, data) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(data, f)
        return path

    def test_deep_merge(self):
        """Test deep merging of dictionaries."""
        config = Config()

        base = {
            "a": 1,
            "b": {"c": 2, "d": 3},
            "e": [1, 2, 3],
        }

        override = {
            "b": {"c": 10, "f": 5},
            "g": "new",
        }

        result = config._deep_merge(base, override)

        assert result["a"] == 1
        assert result["b"]["c"] == 10
        assert result["b"]["d"] == 3
        assert result["b"]["f"] == 5
        assert result["e"] == [1, 2, 3]
        assert result["g"] == "new"

    def test_defaults(self):
        merged = Config().merged

        assert merged.ide.host == "localhost"
        assert merged.ide.port == 12345
        assert merged.ide.timeout == 5.0
        assert merged.ide.separator == ""
        assert merged.server.sse_port == 0
        assert merged.logging.level == "warning"

    def test_precedence(self):
        """Overrides beat local, local beats global."""
        config = Config(
            global_config={"ide": {"host": "global-host", "port": 1111}, "logging": {"level": "info"}},
            local_config={"ide": {"port": 2222}},
            overrides={"logging": {"level": "debug"}},
        )

        merged = config.merged
        assert merged.ide.host == "global-host"
        assert merged.ide.port == 2222
        assert merged.logging.level == "debug"

    def test_set_overrides_resets_cache(self):
        config = Config(local_config={"server": {"sse_port": 8080}})
        assert config.merged.server.sse_port == 8080

        config.set_overrides({"server": {"sse_port": 9090}})
        assert config.merged.server.sse_port == 9090

    def test_invalid_port(self):
        config = Config(local_config={"ide": {"port": 70000}})
        with pytest.raises(ConfigError, match="Invalid configuration"):
            _ = config.merged

    def test_invalid_log_level(self):
        config = Config(overrides={"logging": {"level": "loud"}})
        with pytest.raises(ConfigError):
            _ = config.merged

    def test_log_level_case_insensitive(self):
        assert BridgeConfig(logging={"level": "DEBUG"}).logging.level == "debug"

    def test_channel_from_config(self):
        config = Config(local_config={"ide": {"host": "127.0.0.1", "port": 4000, "timeout": 2, "separator": " "}})
        channel = config.channel()

        assert channel.address == ("127.0.0.1", 4000)
        assert channel.timeout == 2.0
        assert channel.separator == " "

    def test_load_local_config_walks_up(self, isolated, monkeypatch):
        self._write(isolated / "project" / ".ide-mcp" / "config.yaml", {"ide": {"port": 5555}})
        nested = isolated / "project" / "src" / "pkg"
        nested.mkdir(parents=True)

        monkeypatch.chdir(nested)

        assert Config.load().merged.ide.port == 5555

    def test_load_global_and_local(self, isolated):
        self._write(isolated / "home" / ".ide-mcp" / "config.yaml", {"ide": {"host": "ide.local", "port": 1}})
        self._write(isolated / "project" / ".ide-mcp" / "config.yaml", {"ide": {"port": 2}})

        merged = Config.load().merged
        assert merged.ide.host == "ide.local"
        assert merged.ide.port == 2

    def test_load_explicit_file(self, isolated):
        self._write(isolated / "project" / ".ide-mcp" / "config.yaml", {"ide": {"port": 2}})
        explicit = self._write(isolated / "custom.yaml", {"ide": {"port": 3}})

        assert Config.load(explicit).merged.ide.port == 3

    def test_load_missing_explicit_file(self, isolated):
        with pytest.raises(ConfigError, match="not found"):
            Config.load(isolated / "nope.yaml")

    def test_load_empty_file(self, isolated):
        path = isolated / "project" / ".ide-mcp" / "config.yaml"
        path.parent.mkdir(parents=True)
        path.write_text("")

        assert Config.load().merged.ide.port == 12345

    def test_load_malformed_yaml(self, isolated):
        path = isolated / "project" / ".ide-mcp" / "config.yaml"
        path.parent.mkdir(parents=True)
        path.write_text("ide: [unclosed\n")

        with pytest.raises(ConfigError, match="Failed to load config"):
            Config.load()

    def test_load_non_mapping(self, isolated):
        path = isolated / "project" / ".ide-mcp" / "config.yaml"
        path.parent.mkdir(parents=True)
        path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigError, match="mapping"):
            Config.load()
