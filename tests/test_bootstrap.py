import testbridge
from testbridge.configurators import registry


def test_plugins_register_configurators(monkeypatch) -> None:
    monkeypatch.setenv("TESTBRIDGE_PLUGINS", " sample_plugin , ")
    testbridge._load_plugins()
    assert "sample-plugin" in registry
    assert type(registry.create("sample-plugin")).__name__ == "PluginConfigurator"


def test_bootstrap_is_idempotent(monkeypatch) -> None:
    monkeypatch.setenv("TESTBRIDGE_PLUGINS", "module_that_does_not_exist")
    testbridge.bootstrap()
    testbridge.bootstrap()
