import logging
from pathlib import Path

import pytest

from cecssh.adapters.cli.arguments import split_arguments
from cecssh.adapters.config.loader import SettingsLoader
from cecssh.core.exceptions import MissingConfigValueError, SettingsError, UsageError
from cecssh.core.logging import _level_from_name


# ============================================================
# Runtime settings
# ============================================================

def test_settings_defaults():
    settings = SettingsLoader(environ={}).load()

    assert settings.log_level == "WARNING"
    assert settings.log_file is None
    assert settings.connect_timeout is None


def test_settings_from_environment(tmp_path):
    settings = SettingsLoader(environ={
        "CEC_SSH_LOG_LEVEL": "debug",
        "CEC_SSH_LOG_FILE": str(tmp_path / "cec.log"),
        "CEC_SSH_CONNECT_TIMEOUT": "2.5",
        "UNRELATED": "x",
    }).load()

    assert settings.log_level == "DEBUG"
    assert settings.log_file == Path(tmp_path / "cec.log")
    assert settings.connect_timeout == 2.5


def test_integer_timeout_accepted():
    assert SettingsLoader(environ={"CEC_SSH_CONNECT_TIMEOUT": "10"}).load().connect_timeout == 10.0


@pytest.mark.parametrize("value", ["soon", "0", "-3", "nan", "inf", "-inf"])
def test_bad_timeout_rejected(value):
    with pytest.raises(SettingsError) as exc_info:
        SettingsLoader(environ={"CEC_SSH_CONNECT_TIMEOUT": value}).load()

    assert exc_info.value.exit_code == 9


def test_numeric_log_level_kept():
    settings = SettingsLoader(environ={"CEC_SSH_LOG_LEVEL": "10"}).load()

    assert settings.log_level == "10"
    assert _level_from_name(settings.log_level) == logging.DEBUG


def test_unknown_log_level_rejected():
    with pytest.raises(SettingsError):
        SettingsLoader(environ={"CEC_SSH_LOG_LEVEL": "chatty"}).load()


def test_log_file_name_not_coerced():
    settings = SettingsLoader(environ={"CEC_SSH_LOG_FILE": "2024"}).load()

    assert settings.log_file == Path("2024")


# ============================================================
# Argument splitting
# ============================================================

def test_no_config_flag():
    invocation = split_arguments(["-d", "/dev/cec1", "-M"])

    assert invocation.config_path is None
    assert invocation.command_args == ("-d", "/dev/cec1", "-M")


@pytest.mark.parametrize("flag", ["--config", "-c"])
def test_config_flag_consumes_one_value(flag):
    invocation = split_arguments(["-d", "/dev/cec1", flag, "my.json", "-M"])

    assert invocation.config_path == "my.json"
    assert invocation.command_args == ("-d", "/dev/cec1", "-M")


def test_only_first_config_flag_consumed():
    invocation = split_arguments(["-c", "a.json", "--config", "b.json", "-M"])

    assert invocation.config_path == "a.json"
    assert invocation.command_args == ("--config", "b.json", "-M")


def test_config_flag_without_value():
    with pytest.raises(MissingConfigValueError) as exc_info:
        split_arguments(["-d", "/dev/cec1", "--config"])
    assert exc_info.value.exit_code == 2


def test_missing_value_checked_before_empty_command():
    with pytest.raises(MissingConfigValueError):
        split_arguments(["--config"])


@pytest.mark.parametrize("argv", [[], ["--config", "x.json"]])
def test_no_command_arguments(argv):
    with pytest.raises(UsageError) as exc_info:
        split_arguments(argv)
    assert exc_info.value.exit_code == 1
