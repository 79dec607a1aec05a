"""Tests for bookit.config module."""

import os

import pytest

from bookit.config import (
    DEFAULT_COLORS,
    ENV_DATA_DIR,
    default_config_file,
    load_config,
    parse_config)
from bookit.errors import ConfigurationError


def write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestLoadConfig:

    def test_writes_default_config(self, tmp_path):
        config_file = tmp_path / "xdg" / "bookit" / "config"
        environ = {
            "XDG_CONFIG_HOME": str(tmp_path / "xdg"),
            "XDG_DATA_HOME": str(tmp_path / "share"),
        }
        config = load_config(environ=environ)
        assert config.config_file == str(config_file)
        assert config_file.exists()
        assert config.data_dir == str(tmp_path / "share" / "bookit")
        assert os.path.isdir(config.data_dir)

    def test_env_overrides_data_dir(self, tmp_path):
        config_file = write(
            tmp_path / "config", f"[main]\ndata_dir = {tmp_path / 'a'}\n")
        environ = {ENV_DATA_DIR: str(tmp_path / "b")}
        config = load_config(config_file, environ=environ)
        assert config.data_dir == str(tmp_path / "b")
        assert os.path.isdir(tmp_path / "b")
        assert not os.path.exists(tmp_path / "a")

    def test_data_dir_is_a_file(self, tmp_path):
        config_file = write(tmp_path / "config", "[main]\n")
        blocker = write(tmp_path / "data", "not a directory")
        with pytest.raises(ConfigurationError):
            load_config(config_file, environ={ENV_DATA_DIR: blocker})


class TestParseConfig:

    def test_no_data_dir(self, tmp_path):
        config_file = write(tmp_path / "config", "[main]\ndata_dir =\n")
        with pytest.raises(ConfigurationError) as excinfo:
            parse_config(config_file, {})
        assert ENV_DATA_DIR in str(excinfo.value)
        assert excinfo.value.kind == "configuration"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            parse_config(str(tmp_path / "nope"), {ENV_DATA_DIR: "/tmp"})

    def test_malformed_file(self, tmp_path):
        config_file = write(tmp_path / "config", "data_dir = /tmp\n")
        with pytest.raises(ConfigurationError):
            parse_config(config_file, {})

    def test_colors_and_log_level(self, tmp_path):
        config_file = write(
            tmp_path / "config",
            "[main]\n"
            "data_dir = /tmp/bookit\n"
            "log_level = debug\n"
            "[colors]\n"
            "slug = yellow\n"
            "disable_bold = true\n")
        config = parse_config(config_file, {})
        assert config.log_level == "DEBUG"
        assert config.colors["slug"] == "yellow"
        assert config.colors["name"] == DEFAULT_COLORS["name"]
        assert config.color_bold is False

    def test_disable_colors(self, tmp_path):
        config_file = write(
            tmp_path / "config",
            "[main]\ndata_dir = /tmp/bookit\n"
            "[colors]\ndisable_colors = true\nslug = yellow\n")
        config = parse_config(config_file, {})
        assert config.color_enabled is False
        assert set(config.colors.values()) == {"default"}

    def test_unknown_log_level(self, tmp_path):
        config_file = write(
            tmp_path / "config",
            "[main]\ndata_dir = /tmp/bookit\nlog_level = loud\n")
        assert parse_config(config_file, {}).log_level == "WARNING"


def test_default_config_file_without_xdg(monkeypatch):
    monkeypatch.setenv("HOME", "/home/real")
    environ = {"HOME": "/home/someone"}
    assert default_config_file(environ) == \
        "/home/someone/.config/bookit/config"


def test_paths_expand_against_given_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", "/home/real")
    config_file = write(
        tmp_path / "config", "[main]\ndata_dir = ~/work/$PROJECT\n")
    environ = {"HOME": str(tmp_path / "home"), "PROJECT": "bookit"}
    config = parse_config(config_file, environ)
    assert config.data_dir == str(tmp_path / "home" / "work" / "bookit")
