import logging

from lorenzbeat.utils.logging import _CommandFilter, resolve_log_level, set_command_context, setup_logging


def test_resolve_log_level_from_flags():
    assert resolve_log_level(False, False) == "WARNING"
    assert resolve_log_level(True, False) == "INFO"
    assert resolve_log_level(True, True) == "DEBUG"


def test_records_are_labelled_with_active_command():
    set_command_context("render")
    record = logging.LogRecord("lorenzbeat.test", logging.INFO, __file__, 1, "hello", None, None)
    assert _CommandFilter().filter(record)
    assert record.command == "render"
    set_command_context("cli")


def test_setup_logging_installs_one_stderr_handler():
    setup_logging("INFO")
    setup_logging("DEBUG")
    root = logging.getLogger()
    ours = [h for h in root.handlers if getattr(h, "_lorenzbeat", False)]
    assert len(ours) == 1
    assert root.level == logging.DEBUG
    assert logging.getLogger("matplotlib").level == logging.INFO
    setup_logging("WARNING")
