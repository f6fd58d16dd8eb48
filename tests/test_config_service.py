"""
Tests for configuration loading and precedence.
"""

from pathlib import Path

import pytest

from metalcloud_cli.exceptions import ConfigurationError
from metalcloud_cli.services import ConfigService


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "endpoint: https://file.metalcloud.test\n"
        "api_key: '1:file-key'\n"
        "format: yaml\n"
        "request_timeout: 45\n"
        "unrelated: ignored\n"
    )
    return path


def make_service(tmp_path, config_file=None, environ=None):
    return ConfigService(
        config_path=config_file or tmp_path / "missing.yaml",
        environ=environ or {},
        cwd=tmp_path,
    )


class TestConfigService:
    def test_defaults_without_sources(self, tmp_path):
        config = make_service(tmp_path).load()

        assert config.endpoint is None
        assert config.api_key is None
        assert config.output_format == "text"
        assert config.verify_ssl is True
        assert config.request_timeout == 30

    def test_file_values(self, tmp_path, config_file):
        config = make_service(tmp_path, config_file).load()

        assert config.endpoint == "https://file.metalcloud.test"
        assert config.output_format == "yaml"
        assert config.request_timeout == 45
        assert config.user_id == "1"

    def test_dotenv_overrides_file(self, tmp_path, config_file):
        (tmp_path / ".env").write_text("METALCLOUD_ENDPOINT=https://dotenv.metalcloud.test\n")

        config = make_service(tmp_path, config_file).load()

        assert config.endpoint == "https://dotenv.metalcloud.test"
        assert config.api_key == "1:file-key"

    def test_environment_overrides_dotenv(self, tmp_path, config_file):
        (tmp_path / ".env").write_text("METALCLOUD_ENDPOINT=https://dotenv.metalcloud.test\n")
        environ = {"METALCLOUD_ENDPOINT": "https://env.metalcloud.test"}

        config = make_service(tmp_path, config_file, environ).load()

        assert config.endpoint == "https://env.metalcloud.test"

    def test_flags_override_everything(self, tmp_path, config_file):
        environ = {"METALCLOUD_API_KEY": "2:env-key", "METALCLOUD_FORMAT": "json"}

        config = make_service(tmp_path, config_file, environ).load(
            overrides={"api_key": "3:flag-key", "format": None},
            verbose=True,
            interactive=False,
        )

        assert config.api_key == "3:flag-key"
        assert config.output_format == "json"
        assert config.verbose is True
        assert config.interactive is False

    def test_config_path_from_environment(self, tmp_path, config_file):
        service = ConfigService(environ={"METALCLOUD_CONFIG": str(config_file)}, cwd=tmp_path)

        assert service.config_path == config_file

    def test_env_booleans(self, tmp_path):
        config = make_service(tmp_path, environ={"METALCLOUD_VERIFY_SSL": "false"}).load()

        assert config.verify_ssl is False

    def test_log_dir_is_expanded(self, tmp_path):
        config = make_service(tmp_path, environ={"METALCLOUD_LOG_DIR": "~/mc-logs"}).load()

        assert config.log_dir == Path("~/mc-logs").expanduser()

    @pytest.mark.parametrize(
        "environ",
        [
            {"METALCLOUD_FORMAT": "xml"},
            {"METALCLOUD_VERIFY_SSL": "maybe"},
            {"METALCLOUD_REQUEST_TIMEOUT": "soon"},
            {"METALCLOUD_REQUEST_TIMEOUT": "0"},
        ],
    )
    def test_invalid_values(self, tmp_path, environ):
        with pytest.raises(ConfigurationError):
            make_service(tmp_path, environ=environ).load()

    def test_unparsable_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("endpoint: [unclosed\n")

        with pytest.raises(ConfigurationError):
            make_service(tmp_path, path).load()

    def test_file_must_be_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError):
            make_service(tmp_path, path).load()
