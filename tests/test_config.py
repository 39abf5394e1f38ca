import pytest

from athena_runner import Config, ServiceConfig, PollPolicy, InvalidRequest, QueryService
from conftest import ScriptedService


def write_config(tmp_path, text):
    (tmp_path / 'athena.yaml').write_text(text)
    return str(tmp_path)


def test_defaults_without_file(tmp_path):
    config = Config(str(tmp_path), env={})
    assert config.get('athena.workgroup') == 'primary'
    assert config.get('polling.queued_interval') == 0.05
    assert config.get('polling.running_interval') == 0.01
    assert config.get('missing.key', 'fallback') == 'fallback'


def test_yaml_merged_over_defaults(tmp_path):
    config_dir = write_config(tmp_path, """
athena:
  region: us-west-2
  database: sales
polling:
  timeout: 30
""")
    config = Config(config_dir, env={})
    assert config.get('athena.region') == 'us-west-2'
    assert config.get('athena.workgroup') == 'primary'
    assert config.get('polling.timeout') == 30

    service_config = ServiceConfig.from_config(config)
    assert service_config.database == 'sales'
    assert service_config.catalog is None

    policy = PollPolicy.from_config(config)
    assert policy.timeout == 30
    assert policy.queued_interval == 0.05


def test_environment_overrides_credentials(tmp_path):
    config_dir = write_config(tmp_path, "athena:\n  region: us-west-2\n  database: sales\n")
    config = Config(config_dir, env={'AWS_ACCESS_KEY_ID': 'AKID', 'AWS_SECRET_ACCESS_KEY': 's3cr3t',
                                     'AWS_DEFAULT_REGION': 'ap-south-1'})
    service_config = ServiceConfig.from_config(config)
    assert service_config.access_key_id == 'AKID'
    assert service_config.region == 'ap-south-1'
    assert service_config.has_static_credentials


def test_missing_database_is_invalid(tmp_path):
    config = Config(str(tmp_path), env={'AWS_DEFAULT_REGION': 'us-east-1'})
    with pytest.raises(InvalidRequest):
        ServiceConfig.from_config(config)


def test_camel_case_keys_accepted():
    config = ServiceConfig.from_dict({'region': 'us-east-1', 'database': 'db',
                                      'accessKeyId': 'AKID', 'secretAccessKey': 'x',
                                      'unrelated': 1})
    assert config.access_key_id == 'AKID'
    assert config.workgroup == 'primary'


def test_service_config_is_immutable(service_config):
    with pytest.raises(AttributeError):
        service_config.database = 'other'


def test_query_service_from_config(tmp_path):
    config_dir = write_config(tmp_path, """
athena:
  region: us-east-1
  database: sales
polling:
  running_interval: 0.5
service:
  swallow_errors: true
""")
    service = QueryService.from_config(Config(config_dir, env={}), service=ScriptedService(['SUCCEEDED']))
    assert service.swallow_errors is True
    assert service.poller.policy.running_interval == 0.5
