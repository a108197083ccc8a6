import pytest

from emmet_bridge.runtime import telemetry


def test_configure_rejects_config_and_preset_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="quiet")


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="chatty")


def test_span_reraises_and_keeps_metadata() -> None:
    telemetry.configure(preset="quiet")
    try:
        with pytest.raises(RuntimeError):
            with telemetry.span("test::boom", component=True, metadata={"n": 1}) as handle:
                assert handle.component_name == "test::boom"
                assert handle.metadata == {"n": "1"}
                raise RuntimeError("boom")
    finally:
        telemetry.configure()


def test_get_logger_is_cached_per_name() -> None:
    assert telemetry.get_logger("emmet_bridge.test") is telemetry.get_logger("emmet_bridge.test")


def test_log_options_from_env() -> None:
    options = telemetry.LogOptions.from_env(
        {
            "EMMET_BRIDGE_LOG_LEVEL": "debug",
            "EMMET_BRIDGE_DISABLE_CONSOLE": "1",
            "EMMET_BRIDGE_LOG_BUFFERED": "true",
            "EMMET_BRIDGE_LOG_BUFFER_SIZE": "64",
        }
    )

    assert options.level == "DEBUG"
    assert options.console is False
    assert options.buffered is True
    assert options.buffer_size == 64
    assert options.file == ""
