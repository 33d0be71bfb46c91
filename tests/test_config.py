from pathlib import Path

from media_grabber.config import CONFIG_FILE_NAME, Settings, load_settings
from media_grabber.domain.errors import ConfigError


def _error(result) -> ConfigError:
    error_value, _ = result.monoid
    return error_value


def test_load_settings_defaults_without_file(tmp_path):
    result = load_settings(tmp_path)

    assert result.is_right()
    settings = result.value
    assert settings.root == tmp_path.resolve()
    assert settings.cookie_file == tmp_path.resolve() / "cookies.txt"
    assert settings.downloader_command == ("yt-dlp",)
    assert settings.probe_timeout == 8.0
    assert settings.socket_timeout == 5
    assert settings.log_level == "WARNING"
    assert settings.lang is None


def test_load_settings_reads_yaml_overrides(tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text(
        "downloader: python -m yt_dlp\n"
        "cookie_file: secrets/cookies.txt\n"
        "probe_timeout: 3\n"
        "socket_timeout: 10\n"
        "log_level: info\n"
        "lang: fr\n"
    )

    result = load_settings(tmp_path)

    assert result.is_right()
    settings = result.value
    assert settings.downloader_command == ("python", "-m", "yt_dlp")
    assert settings.cookie_file == tmp_path.resolve() / "secrets" / "cookies.txt"
    assert settings.probe_timeout == 3.0
    assert settings.socket_timeout == 10
    assert settings.log_level == "INFO"
    assert settings.lang == "fr"


def test_load_settings_accepts_command_list_and_absolute_cookie_path(tmp_path):
    cookie_file = tmp_path / "elsewhere" / "cookies.txt"
    (tmp_path / CONFIG_FILE_NAME).write_text(
        f"downloader: ['/opt/yt-dlp', '--ignore-config']\ncookie_file: '{cookie_file}'\n"
    )

    settings = load_settings(tmp_path).value

    assert settings.downloader_command == ("/opt/yt-dlp", "--ignore-config")
    assert settings.cookie_file == cookie_file


def test_load_settings_empty_file_gives_defaults(tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text("")

    result = load_settings(tmp_path)

    assert result.is_right()
    assert result.value.downloader_command == Settings().downloader_command


def test_load_settings_malformed_yaml(tmp_path, caplog):
    (tmp_path / CONFIG_FILE_NAME).write_text("downloader: [unclosed\n")

    result = load_settings(tmp_path)

    assert result.is_left()
    assert isinstance(_error(result), ConfigError)
    assert "Could not read" in _error(result).message
    assert "Could not read configuration file" in caplog.text


def test_load_settings_rejects_non_mapping(tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text("- yt-dlp\n- cookies.txt\n")

    result = load_settings(tmp_path)

    assert result.is_left()
    assert "mapping" in _error(result).message


def test_load_settings_rejects_unknown_key(tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text("retries: 3\n")

    result = load_settings(tmp_path)

    assert result.is_left()
    assert "Unknown setting 'retries'" in _error(result).message


def test_load_settings_rejects_bad_values(tmp_path):
    config_file = tmp_path / CONFIG_FILE_NAME
    for content in (
        "probe_timeout: -1\n",
        "socket_timeout: yes\n",
        "socket_timeout: 0.5\n",
        "socket_timeout: 2.5\n",
        "socket_timeout: .inf\n",
        "probe_timeout: .nan\n",
        "log_level: LOUD\n",
        "downloader: ''\n",
    ):
        config_file.write_text(content)
        result = load_settings(tmp_path)
        assert result.is_left(), content
        assert "Invalid value" in _error(result).message


def test_load_settings_explicit_config_file(tmp_path):
    config_file = tmp_path / "custom.yml"
    config_file.write_text("probe_timeout: 1.5\n")

    settings = load_settings(tmp_path, config_file=Path(config_file)).value

    assert settings.probe_timeout == 1.5


def test_load_settings_accepts_whole_float_socket_timeout(tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text("socket_timeout: 7.0\n")

    settings = load_settings(tmp_path).value

    assert settings.socket_timeout == 7
    assert isinstance(settings.socket_timeout, int)
