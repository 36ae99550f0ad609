import logging

from plantlight.logging_utils import configure_logging


def test_configure_logging_honours_env_override(monkeypatch, tmp_path):
    target_dir = tmp_path / "logs"
    monkeypatch.setenv("PLANTLIGHT_LOG_DIR", str(target_dir))

    log_path = configure_logging("unit_test", include_console=False)
    logging.getLogger(__name__).info("env override works")

    assert log_path == target_dir / "unit_test.log"
    assert log_path.exists()
    assert "env override works" in log_path.read_text()


def test_configure_logging_replaces_previous_handlers(tmp_path):
    first_path = configure_logging(
        "first_run", log_dir=tmp_path / "logs", include_console=False
    )
    logging.getLogger(__name__).info("first run entry")
    assert "first run entry" in first_path.read_text()

    second_path = configure_logging(
        "second_run", log_dir=tmp_path / "alt_logs", include_console=False
    )
    logging.getLogger(__name__).info("second run entry")
    assert second_path == tmp_path / "alt_logs" / "second_run.log"
    assert "second run entry" in second_path.read_text()
    assert "second run entry" not in first_path.read_text()

    managed = [
        handler
        for handler in logging.getLogger().handlers
        if getattr(handler, "_plantlight_managed_handler", False)
    ]
    assert len(managed) == 1


def test_debug_level_is_applied(tmp_path):
    log_path = configure_logging(
        "debug_run", level=logging.DEBUG, log_dir=tmp_path, include_console=False
    )
    logging.getLogger("plantlight.test").debug("fine detail")
    assert "fine detail" in log_path.read_text()
    assert "[DEBUG] plantlight.test" in log_path.read_text()
