from pathlib import Path

import pytest

from validator_harness.config import (
    ConfigurationError,
    env_bool,
    env_int,
    env_is_set,
    env_seconds,
    env_str,
    errors,
    get_harness_settings,
    harness,
    load_harness_settings,
    runtime,
)
from validator_harness.config.runtime_helpers import DotenvLoader, JsonConfigLoader


def test_env_str_falls_back_to_file_defaults(monkeypatch):
    monkeypatch.setattr(runtime, "_DEFAULT_VALUES", {"VALIDATOR_EXECUTABLE": "amman-dev"})

    assert env_str("VALIDATOR_EXECUTABLE") == "amman-dev"


def test_env_str_prefers_environment_over_defaults(monkeypatch):
    monkeypatch.setattr(runtime, "_DEFAULT_VALUES", {"VALIDATOR_EXECUTABLE": "amman-dev"})
    monkeypatch.setenv("VALIDATOR_EXECUTABLE", "  amman-ci  ")

    assert env_str("VALIDATOR_EXECUTABLE") == "amman-ci"


def test_env_str_required_missing_raises():
    with pytest.raises(ConfigurationError):
        env_str("VALIDATOR_MISSING", required=True)


def test_env_int_rejects_garbage(monkeypatch):
    monkeypatch.setenv("VALIDATOR_PORT", "eighty")

    with pytest.raises(ConfigurationError, match="VALIDATOR_PORT"):
        env_int("VALIDATOR_PORT")


@pytest.mark.parametrize("raw,expected", [("yes", True), ("0", False), ("On", True)])
def test_env_bool_parses_common_spellings(monkeypatch, raw, expected):
    monkeypatch.setenv("HARNESS_QUIET", raw)

    assert env_bool("HARNESS_QUIET") is expected


def test_env_seconds_rejects_negative(monkeypatch):
    monkeypatch.setenv("VALIDATOR_WAIT_TIMEOUT_SECONDS", "-1")

    with pytest.raises(ConfigurationError):
        env_seconds("VALIDATOR_WAIT_TIMEOUT_SECONDS")


def test_env_is_set_treats_blank_as_present(monkeypatch):
    assert env_is_set("DUMP_AMMAN") is False

    monkeypatch.setenv("DUMP_AMMAN", "")

    assert env_is_set("DUMP_AMMAN") is True


def test_harness_settings_defaults():
    settings = load_harness_settings()

    assert settings.executable == "amman"
    assert settings.dump_output_env == "DUMP_AMMAN"
    assert settings.ports == (8899, 8900)
    assert settings.fixtures_dir == Path("./tests/fixtures")
    assert settings.assets_subdir == "assets"
    assert settings.poll_interval_seconds == 0.0
    assert settings.poll_backoff_multiplier == 1.0
    assert settings.wait_timeout_seconds is None


def test_harness_settings_read_environment(monkeypatch):
    monkeypatch.setenv("VALIDATOR_EXECUTABLE", "/opt/bin/amman")
    monkeypatch.setenv("VALIDATOR_PORT", "18899")
    monkeypatch.setenv("VALIDATOR_RPC_PORT", "18900")
    monkeypatch.setenv("VALIDATOR_WAIT_TIMEOUT_SECONDS", "90")
    monkeypatch.setenv("VALIDATOR_POLL_INTERVAL_SECONDS", "0.05")

    settings = get_harness_settings()

    assert settings.executable == "/opt/bin/amman"
    assert settings.ports == (18899, 18900)
    assert settings.wait_timeout_seconds == 90.0
    assert settings.poll_interval_seconds == 0.05
    assert get_harness_settings() is settings


@pytest.mark.parametrize("port", ["0", "70000"])
def test_harness_settings_reject_out_of_range_ports(monkeypatch, port):
    monkeypatch.setenv("VALIDATOR_PORT", port)

    with pytest.raises(ConfigurationError, match="VALIDATOR_PORT"):
        load_harness_settings()


def test_harness_settings_reject_identical_ports(monkeypatch):
    monkeypatch.setenv("VALIDATOR_PORT", "9000")
    monkeypatch.setenv("VALIDATOR_RPC_PORT", "9000")

    with pytest.raises(ConfigurationError, match="must differ"):
        load_harness_settings()


def test_harness_settings_reject_shrinking_backoff(monkeypatch):
    monkeypatch.setenv("VALIDATOR_POLL_BACKOFF_MULTIPLIER", "0.5")

    with pytest.raises(ConfigurationError):
        load_harness_settings()


@pytest.mark.parametrize("raw", ["0", "0.0"])
def test_harness_settings_reject_zero_connect_timeout(monkeypatch, raw):
    monkeypatch.setenv("VALIDATOR_CONNECT_TIMEOUT_SECONDS", raw)

    with pytest.raises(ConfigurationError, match="VALIDATOR_CONNECT_TIMEOUT_SECONDS"):
        load_harness_settings()


def test_dotenv_loader_parses_values(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("# comment\nexport VALIDATOR_HOST='localhost'\nVALIDATOR_PORT=1234\nnot a pair\n")

    values = DotenvLoader.load_from_file(env_file)

    assert values == {"VALIDATOR_HOST": "localhost", "VALIDATOR_PORT": "1234"}


def test_dotenv_loader_missing_file_is_empty(tmp_path):
    assert DotenvLoader.load_from_file(tmp_path / "absent.env") == {}


def test_json_config_loader_stringifies_scalars(tmp_path):
    config_file = tmp_path / "harness_env.json"
    config_file.write_text('{"VALIDATOR_PORT": 1234, "HARNESS_QUIET": true, "VALIDATOR_HOST": null}')

    values = JsonConfigLoader.load_from_file(config_file)

    assert values == {"VALIDATOR_PORT": "1234", "HARNESS_QUIET": "true", "VALIDATOR_HOST": ""}


def test_json_config_loader_rejects_nested_values(tmp_path):
    config_file = tmp_path / "harness_env.json"
    config_file.write_text('{"VALIDATOR_PORT": [1, 2]}')

    with pytest.raises(ConfigurationError, match="scalar"):
        JsonConfigLoader.load_from_file(config_file)


def test_json_config_loader_rejects_invalid_json(tmp_path):
    config_file = tmp_path / "harness_env.json"
    config_file.write_text("{not json")

    with pytest.raises(ConfigurationError):
        JsonConfigLoader.load_from_file(config_file)


def test_default_values_loaded_from_candidate_files(monkeypatch, tmp_path):
    dotenv = tmp_path / ".env"
    dotenv.write_text("VALIDATOR_HOST=10.0.0.5\n")
    json_file = tmp_path / "harness_env.json"
    json_file.write_text('{"VALIDATOR_HOST": "ignored", "VALIDATOR_PORT": 7000}')
    monkeypatch.setattr(runtime, "_DOTENV_CANDIDATES", (dotenv,))
    monkeypatch.setattr(runtime, "_JSON_ENV_CANDIDATES", (json_file,))
    runtime.reset_default_values()

    assert env_str("VALIDATOR_HOST") == "10.0.0.5"
    assert env_int("VALIDATOR_PORT") == 7000


@pytest.mark.parametrize("module", [runtime, errors, harness])
def test_config_modules_carry_docstrings(module):
    assert module.__doc__


def test_configuration_error_constructors_name_the_setting(tmp_path):
    invalid = ConfigurationError.invalid_value("VALIDATOR_PORT", 0, "Ports must be between 1 and 65535")
    missing = ConfigurationError.missing_path("VALIDATOR_FIXTURES_DIR", tmp_path / "absent")

    assert str(invalid) == "Invalid value for VALIDATOR_PORT: 0. Ports must be between 1 and 65535"
    assert str(missing).startswith("VALIDATOR_FIXTURES_DIR points to a missing location")
    assert not hasattr(ConfigurationError, "load_failed")
