import pytest

from ..base import ConfigError
from ..settings import Settings


def test_get_value_alternatives():
    settings = Settings({"ebsi.environment": "conformance"})
    assert settings.get_value("missing", "ebsi.environment") == "conformance"
    assert settings.get_value("missing", default="pilot") == "pilot"


def test_typed_getters():
    settings = Settings(
        {
            "ledger.disabled": "false",
            "ebsi.rpc_timeout": "12.5",
            "count": "3",
        }
    )
    assert settings.get_bool("ledger.disabled") is False
    assert settings.get_float("ebsi.rpc_timeout") == 12.5
    assert settings.get_int("count") == 3
    assert settings.get_str("count") == "3"
    assert settings.get_int("absent") is None


def test_get_int_invalid():
    with pytest.raises(ConfigError):
        Settings({"count": "many"}).get_int("count")


def test_mapping_interface():
    settings = Settings()
    settings["ebsi.version"] = "v5"
    assert "ebsi.version" in settings
    assert len(settings) == 1
    del settings["ebsi.version"]
    with pytest.raises(KeyError):
        settings["ebsi.version"]
    with pytest.raises(TypeError):
        settings.set_value(1, "x")


def test_extend_and_copy():
    settings = Settings({"a": 1})
    extended = settings.extend({"b": 2})
    assert dict(extended) == {"a": 1, "b": 2}
    assert "b" not in settings
    assert dict(settings.copy()) == {"a": 1}


def test_from_env():
    settings = Settings.from_env(
        {
            "EBSI_ENVIRONMENT": "conformance",
            "EBSI_VERSION": "",
            "LEDGER_DISABLED": "1",
            "UNRELATED": "x",
        }
    )
    assert dict(settings) == {
        "ebsi.environment": "conformance",
        "ledger.disabled": "1",
    }
    assert settings.get_bool("ledger.disabled") is True
