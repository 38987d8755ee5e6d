"""Tests for note.core.config module."""

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

import note.core.config as config
from note.core.config import ConfigError, NoteConfig, load_config, save_config


class TestEnvHelpers:
    """Tests for environment variable helpers."""

    def test_get_env_returns_value(self, monkeypatch):
        """get_env returns environment variable value."""
        monkeypatch.setenv("TEST_VAR", "test_value")

        assert config.get_env("TEST_VAR") == "test_value"

    def test_get_env_returns_default(self, monkeypatch):
        """get_env returns default when var not set."""
        monkeypatch.delenv("NONEXISTENT_VAR", raising=False)

        assert config.get_env("NONEXISTENT_VAR", "default") == "default"

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("true", True),
            ("True", True),
            ("1", True),
            ("yes", True),
            ("false", False),
            ("0", False),
            ("no", False),
        ],
    )
    def test_get_env_bool_parses_known_values(self, monkeypatch, value, expected):
        """get_env_bool parses known values."""
        monkeypatch.setenv("BOOL_VAR", value)

        assert config.get_env_bool("BOOL_VAR") is expected

    def test_get_env_bool_warns_for_invalid_value(self, monkeypatch, caplog):
        """get_env_bool warns when value cannot be parsed."""
        monkeypatch.setenv("BOOL_VAR", "maybe")
        caplog.set_level(logging.WARNING, logger="note.core.config")

        assert config.get_env_bool("BOOL_VAR", True) is True
        assert "not a valid boolean" in caplog.text


class TestExpandPath:
    """Tests for expand_path()."""

    def test_expands_tilde(self, home_dir):
        """~/ is replaced by the home directory."""
        assert config.expand_path("~/Documents") == str(home_dir / "Documents")

    def test_resolves_symlink(self, tmp_path):
        """Symlinked folders resolve to their target."""
        real = tmp_path / "real-notes"
        real.mkdir()
        link = tmp_path / "link-notes"
        try:
            link.symlink_to(real)
        except OSError:
            pytest.skip("symlinks not supported")

        assert config.expand_path(str(link)) == str(real.resolve())

    def test_missing_path_returned_as_is(self, tmp_path):
        """Paths that do not exist yet are left alone."""
        missing = str(tmp_path / "non-existent")

        assert config.expand_path(missing) == missing


class TestConfigFile:
    """Tests for loading and saving ~/.note."""

    def test_config_path_override(self, monkeypatch, tmp_path):
        """NOTE_CONFIG_FILE overrides the default location."""
        monkeypatch.setenv("NOTE_CONFIG_FILE", str(tmp_path / "custom"))

        assert config.get_config_path() == tmp_path / "custom"

    def test_load(self, config_file, notes_dir):
        """A valid file loads into a NoteConfig."""
        loaded = load_config()

        assert loaded.editor == "vim"
        assert loaded.notes_dir == Path(config.expand_path(str(notes_dir)))

    def test_load_missing_file(self, tmp_path):
        """A missing file raises ConfigError."""
        with pytest.raises(ConfigError, match="No config file"):
            load_config(tmp_path / "absent")

    def test_load_missing_key(self, tmp_path):
        """A file without notesdir is invalid."""
        path = tmp_path / ".note"
        path.write_text("editor=nano\n")

        with pytest.raises(ConfigError, match="Invalid config"):
            load_config(path)

    def test_editor_with_arguments(self, tmp_path, notes_dir):
        """Editor values may contain spaces."""
        path = tmp_path / ".note"
        path.write_text(f"editor=code -w\nnotesdir={notes_dir}\n")

        assert load_config(path).editor == "code -w"

    def test_values_read_literally(self, tmp_path, notes_dir, monkeypatch):
        """${...} in a value is kept as written, not expanded."""
        monkeypatch.setenv("EDITOR_FLAGS", "--wait")
        path = tmp_path / ".note"
        path.write_text(f"editor=code ${{EDITOR_FLAGS}}\nnotesdir={notes_dir}\n")

        assert load_config(path).editor == "code ${EDITOR_FLAGS}"

    def test_save_uses_tilde(self, home_dir, tmp_path):
        """Notes folders under home are saved in ~ notation."""
        path = tmp_path / ".note"
        cfg = NoteConfig(editor="nano", notes_dir=str(home_dir / "Notes"))

        save_config(cfg, path)

        assert path.read_text() == "editor=nano\nnotesdir=~/Notes\n"

    def test_save_then_load(self, home_dir, tmp_path):
        """A saved config loads back to the same values."""
        (home_dir / "Notes").mkdir()
        path = tmp_path / ".note"
        cfg = NoteConfig(editor="nano", notes_dir=str(home_dir / "Notes"))

        save_config(cfg, path)

        assert load_config(path) == cfg

    def test_config_is_frozen(self, notes_dir):
        """NoteConfig cannot be mutated."""
        cfg = NoteConfig(editor="vim", notes_dir=str(notes_dir))

        with pytest.raises(ValidationError):
            cfg.editor = "nano"
