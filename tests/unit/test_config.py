"""
Unit tests for configuration loading
"""

import pytest

from cronradar.config import (
    MonitorConfig,
    load_env_file,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
)
from cronradar.exceptions import MissingConfigurationError


class TestMonitorConfig:
    """Tests for MonitorConfig"""

    def test_defaults(self):
        config = MonitorConfig.from_env({})

        assert config.api_key is None
        assert config.enabled is False
        assert config.base_url == DEFAULT_BASE_URL
        assert config.method == 'GET'
        assert config.timeout == DEFAULT_TIMEOUT == 5
        assert config.source is None

    def test_from_env_values(self):
        config = MonitorConfig.from_env({
            'MONITOR_API_KEY': ' secret ',
            'MONITOR_BASE_URL': 'http://monitor.local:8000/',
            'MONITOR_METHOD': 'head',
            'MONITOR_SOURCE': 'cron',
        })

        assert config.api_key == 'secret'
        assert config.enabled is True
        assert config.base_url == 'http://monitor.local:8000'
        assert config.method == 'HEAD'
        assert config.source == 'cron'

    def test_from_env_reads_process_environment(self, clean_env):
        clean_env.setenv('MONITOR_API_KEY', 'from-process')

        assert MonitorConfig.from_env().api_key == 'from-process'

    def test_require_api_key(self):
        assert MonitorConfig(api_key='k').require_api_key() == 'k'

        with pytest.raises(MissingConfigurationError):
            MonitorConfig(api_key='').require_api_key()

    def test_repr_hides_api_key(self):
        assert 'secret' not in repr(MonitorConfig(api_key='secret'))


class TestLoadEnvFile:
    """Tests for dotenv loading"""

    def test_loads_variables(self, tmp_path, clean_env):
        env_file = tmp_path / '.env'
        env_file.write_text('MONITOR_API_KEY=file-key\nMONITOR_METHOD=post\n')

        assert load_env_file(str(env_file)) is True

        config = MonitorConfig.from_env()
        assert config.api_key == 'file-key'
        assert config.method == 'POST'

    def test_process_environment_wins(self, tmp_path, clean_env):
        clean_env.setenv('MONITOR_API_KEY', 'process-key')
        env_file = tmp_path / '.env'
        env_file.write_text('MONITOR_API_KEY=file-key\n')

        load_env_file(str(env_file))

        assert MonitorConfig.from_env().api_key == 'process-key'

    def test_missing_file(self, tmp_path):
        assert load_env_file(str(tmp_path / 'missing.env')) is False
