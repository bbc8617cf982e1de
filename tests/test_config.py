from ax_inspector.config import AXInspectorConfig, DEFAULT_INTERACTIVE_ROLES, load_config_from_env


ENV_VARS = (
    'AX_MAX_DEPTH', 'AX_INTERESTING_ONLY', 'AX_USE_FULL_TREE', 'AX_MAX_ELEMENTS',
    'AX_INCLUDE_DISABLED', 'AX_CDP_URL', 'DEBUG', 'LOG_LEVEL',
)


def _clear(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    _clear(monkeypatch)
    config = load_config_from_env()
    assert config.tree.max_depth == 10
    assert config.tree.interesting_only is True
    assert config.tree.use_full_tree is False
    assert config.interactive.max_elements == 100
    assert config.interactive.include_disabled is False
    assert config.interactive.roles == set(DEFAULT_INTERACTIVE_ROLES)
    assert len(config.interactive.roles) == 20
    assert config.server.log_level == 'INFO'
    assert config.server.cdp_url == 'http://localhost:9222'


def test_env_overrides(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv('AX_MAX_DEPTH', '4')
    monkeypatch.setenv('AX_INTERESTING_ONLY', 'false')
    monkeypatch.setenv('AX_USE_FULL_TREE', 'true')
    monkeypatch.setenv('AX_MAX_ELEMENTS', '25')
    monkeypatch.setenv('AX_INCLUDE_DISABLED', '1')
    monkeypatch.setenv('AX_CDP_URL', 'http://127.0.0.1:9333')
    monkeypatch.setenv('DEBUG', 'true')
    monkeypatch.setenv('LOG_LEVEL', 'WARNING')

    config = load_config_from_env()
    assert config.tree.max_depth == 4
    assert config.tree.interesting_only is False
    assert config.tree.use_full_tree is True
    assert config.interactive.max_elements == 25
    assert config.interactive.include_disabled is True
    assert config.server.cdp_url == 'http://127.0.0.1:9333'
    assert config.server.debug is True
    assert config.server.log_level == 'WARNING'


def test_sections_are_independent():
    first, second = AXInspectorConfig(), AXInspectorConfig()
    first.interactive.roles.add('heading')
    assert 'heading' not in second.interactive.roles
