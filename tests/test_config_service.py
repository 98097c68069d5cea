from pathlib import Path

from timephase.core.config_service import PACKAGED_CONFIG, ConfigService, config


def test_singleton():
    assert ConfigService() is config


def test_defaults(isolated_config):
    assert isolated_config.get('display.interval') == '10ms'
    assert isolated_config.get('display.threshold') == '0.1ms'
    assert isolated_config.get('display.offset') == '-123us'
    assert isolated_config.get('display.clear_width') == 208
    assert isolated_config.get('timezone') is None
    assert isolated_config.get('logging.level') == 'WARNING'


def test_packaged_default_file_exists():
    assert PACKAGED_CONFIG.exists()
    assert PACKAGED_CONFIG.name == 'default.yaml'


def test_yaml_file_overrides_defaults(tmp_path, monkeypatch, isolated_config):
    path = tmp_path / 'custom.yaml'
    path.write_text(
        "timezone: Europe/Berlin\n"
        "display:\n"
        "  interval: 1s\n",
        encoding='utf-8',
    )
    monkeypatch.setenv('TIMEPHASE_CONFIG', str(path))
    isolated_config.reload()

    assert isolated_config.get('timezone') == 'Europe/Berlin'
    assert isolated_config.get('display.interval') == '1s'
    # untouched keys keep their defaults
    assert isolated_config.get('display.offset') == '-123us'


def test_user_config_in_home(tmp_path, isolated_config):
    user_dir = Path(tmp_path) / '.config' / 'timephase'
    user_dir.mkdir(parents=True)
    (user_dir / 'config.yaml').write_text("display:\n  interval: 50ms\n", encoding='utf-8')
    isolated_config.reload()

    assert isolated_config.get('display.interval') == '50ms'


def test_invalid_yaml_falls_back(tmp_path, monkeypatch, caplog, isolated_config):
    path = tmp_path / 'broken.yaml'
    path.write_text("display: [unclosed\n", encoding='utf-8')
    monkeypatch.setenv('TIMEPHASE_CONFIG', str(path))
    isolated_config.reload()

    assert 'Failed to load' in caplog.text
    assert isolated_config.get('display.interval') == '10ms'


def test_non_mapping_yaml_is_ignored(tmp_path, monkeypatch, caplog, isolated_config):
    path = tmp_path / 'list.yaml'
    path.write_text("- 1\n- 2\n", encoding='utf-8')
    monkeypatch.setenv('TIMEPHASE_CONFIG', str(path))
    isolated_config.reload()

    assert 'not a mapping' in caplog.text
    assert isolated_config.get('display.interval') == '10ms'


def test_env_overrides_file(tmp_path, monkeypatch, isolated_config):
    path = tmp_path / 'custom.yaml'
    path.write_text("display:\n  interval: 1s\n", encoding='utf-8')
    monkeypatch.setenv('TIMEPHASE_CONFIG', str(path))
    monkeypatch.setenv('TIMEPHASE_INTERVAL', '20ms')
    monkeypatch.setenv('TIMEPHASE_THRESHOLD', '1ms')
    monkeypatch.setenv('TIMEPHASE_OFFSET', '0')
    monkeypatch.setenv('TIMEZONE', 'UTC')
    monkeypatch.setenv('LOG_LEVEL', 'debug')
    isolated_config.reload()

    assert isolated_config.get('display.interval') == '20ms'
    assert isolated_config.get('display.threshold') == '1ms'
    assert isolated_config.get('display.offset') == '0'
    assert isolated_config.get('timezone') == 'UTC'
    assert isolated_config.get('logging.level') == 'debug'


def test_dot_notation_get_and_set(isolated_config):
    isolated_config.set('display.interval', '5ms')
    isolated_config.set('extra.nested.key', 3)

    assert isolated_config.get('display.interval') == '5ms'
    assert isolated_config.get('extra.nested.key') == 3
    assert isolated_config.get('extra.missing', 'fallback') == 'fallback'
    assert isolated_config.get('display.interval.deeper', 'fallback') == 'fallback'


def test_get_all_returns_copy(isolated_config):
    snapshot = isolated_config.get_all()
    snapshot['timezone'] = 'changed'
    assert isolated_config.get('timezone') is None
