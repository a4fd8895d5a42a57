# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


from dataclasses import dataclass, field

import pytest

from lljob_lib.core.config import Config, _dict_to_dataclass


def test_dict_to_dataclass_simple_conversion():
    @dataclass
    class SimpleConfig:
        name: str = "default"
        count: int = 0

    result = _dict_to_dataclass(SimpleConfig, {"name": "test", "count": 42})

    assert isinstance(result, SimpleConfig)
    assert result.name == "test"
    assert result.count == 42


def test_dict_to_dataclass_nested_conversion():
    @dataclass
    class Inner:
        value: int = 0

    @dataclass
    class Outer:
        inner: Inner = field(default_factory=Inner)
        name: str = "default"

    result = _dict_to_dataclass(Outer, {"inner": {"value": 99}, "name": "outer"})

    assert isinstance(result.inner, Inner)
    assert result.inner.value == 99
    assert result.name == "outer"


def test_dict_to_dataclass_extra_fields_ignored():
    @dataclass
    class Settings:
        valid: str = "default"

    result = _dict_to_dataclass(Settings, {"valid": "value", "invalid": "ignored"})

    assert result.valid == "value"
    assert not hasattr(result, "invalid")


def test_dict_to_dataclass_non_dataclass_returns_unchanged():
    data = {"key": "value"}
    assert _dict_to_dataclass(str, data) == data


def test_get_config_path_env_variable_highest_priority(tmp_path, monkeypatch):
    config_file = tmp_path / "custom_config.toml"
    config_file.write_text("")
    (tmp_path / "lljob_config.toml").write_text("")

    monkeypatch.setenv("LLJOB_CONFIG", str(config_file))
    monkeypatch.chdir(tmp_path)

    assert Config._get_config_path() == config_file


def test_get_config_path_current_directory_second_priority(tmp_path, monkeypatch):
    config_file = tmp_path / "lljob_config.toml"
    config_file.write_text("")

    xdg_config = tmp_path / "config"
    (xdg_config / "lljob").mkdir(parents=True)
    (xdg_config / "lljob" / "config.toml").write_text("")

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LLJOB_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_config))

    assert Config._get_config_path() == config_file


def test_get_config_path_xdg_config_home_third_priority(tmp_path, monkeypatch):
    xdg_config = tmp_path / "config"
    (xdg_config / "lljob").mkdir(parents=True)
    config_file = xdg_config / "lljob" / "config.toml"
    config_file.write_text("")

    other_dir = tmp_path / "other"
    other_dir.mkdir()

    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_config))
    monkeypatch.chdir(other_dir)
    monkeypatch.delenv("LLJOB_CONFIG", raising=False)

    assert Config._get_config_path() == config_file


def test_get_config_path_returns_none_when_no_config_exists(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LLJOB_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "nonexistent"))

    assert Config._get_config_path() is None


def test_load_with_explicit_path(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("""
binary_name = "lljob2"

[defaults]
ranks_per_node = 32
launcher = "srun"

[scheduler]
min_bg_size = 64

[exit_codes]
default = 100
""")

    config = Config.load(config_file)

    assert config.binary_name == "lljob2"
    assert config.defaults.ranks_per_node == 32
    assert config.defaults.launcher == "srun"
    assert config.scheduler.min_bg_size == 64
    assert config.exit_codes.default == 100

    # non-overriden values
    assert config.defaults.bg_size == 32
    assert config.scheduler.submit_command == "llsubmit"
    assert config.directives.prefix == "# @ "


def test_load_returns_defaults_when_file_missing(tmp_path):
    assert Config.load(tmp_path / "does_not_exist.toml") == Config()


def test_load_empty_config_file_uses_all_defaults(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("")

    assert Config.load(config_file) == Config()


def test_load_without_path_searches_standard_locations(tmp_path, monkeypatch):
    (tmp_path / "lljob_config.toml").write_text('binary_name = "lljob2"\n')

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LLJOB_CONFIG", raising=False)

    assert Config.load().binary_name == "lljob2"


def test_load_invalid_toml_raises_value_error(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("[defaults\nbg_size = ")

    with pytest.raises(ValueError, match="Could not read lljob config"):
        Config.load(config_file)


def test_default_config_matches_blue_gene_job_script():
    config = Config()

    assert config.defaults.environment == "COPY_ALL"
    assert config.defaults.notification == "error"
    assert config.defaults.job_type == "bluegene"
    assert config.defaults.error == "$(job_name).$(jobid).out"
    assert config.defaults.output == "$(job_name).$(jobid).out"
    assert config.launcher.thread_variable == "OMP_NUM_THREADS"
    assert config.scheduler.min_bg_size == 32
