import pytest

from emmet_bridge.runtime.config import (
    DEFAULT_SUPPORTED_SYNTAXES,
    BridgeSettings,
    load_settings,
)


def test_defaults_from_empty_environment() -> None:
    settings = load_settings({})

    assert settings.default_profile == "html"
    assert settings.strict_selection is False
    assert settings.supported_syntaxes == DEFAULT_SUPPORTED_SYNTAXES
    assert settings.command_prefix == "emmet."
    assert dict(settings.variables) == {}


def test_environment_overrides() -> None:
    settings = load_settings(
        {
            "EMMET_BRIDGE_PLATFORM": "macOS",
            "EMMET_BRIDGE_DEFAULT_PROFILE": "xhtml",
            "EMMET_BRIDGE_STRICT_SELECTION": "yes",
            "EMMET_BRIDGE_SUPPORTED_SYNTAXES": "css, HTML,,css",
            "EMMET_BRIDGE_COMMAND_PREFIX": "zen.",
            "EMMET_BRIDGE_VAR_LANG": "de",
        }
    )

    assert settings.mac is True
    assert settings.default_profile == "xhtml"
    assert settings.strict_selection is True
    assert settings.supported_syntaxes == ("css", "html")
    assert settings.command_prefix == "zen."
    assert dict(settings.variables) == {"lang": "de"}


def test_non_mac_platform() -> None:
    assert load_settings({"EMMET_BRIDGE_PLATFORM": "linux"}).mac is False


def test_supports_is_case_insensitive() -> None:
    settings = BridgeSettings(supported_syntaxes=("CSS",))

    assert settings.supports("css")
    assert settings.supports("Css")
    assert not settings.supports("html")
    assert not settings.supports(None)


def test_empty_command_prefix_is_rejected() -> None:
    with pytest.raises(ValueError):
        BridgeSettings(command_prefix="")
