import re

from concurrentengine.logger import (
    LogLevel,
    ThreadLogger,
    get_logger,
    log_error,
    log_info,
)


def test_format_message_with_thread_id():
    text = ThreadLogger().format_message("hi", LogLevel.WARN, 7)
    assert text[22:] == "[WARN] Thread 7: hi"
    assert re.fullmatch(r"\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\] ", text[:22]) is not None


def test_format_message_without_thread_id():
    text = ThreadLogger().format_message("plain", LogLevel.DEBUG)
    assert text.endswith("[DEBUG] plain")
    assert "Thread" not in text


def test_log_writes_coloured_line(capsys):
    ThreadLogger().log("hello", LogLevel.INFO, 3)
    out = capsys.readouterr().out
    assert out.startswith("\033[32m")
    assert out.endswith("\033[0m\n")
    assert "[INFO] Thread 3: hello" in out


def test_error_level_colour(capsys):
    ThreadLogger().log("bad", LogLevel.ERROR)
    assert capsys.readouterr().out.startswith("\033[31m")


def test_file_logging_round_trip(tmp_path):
    logger = ThreadLogger()
    path = tmp_path / "thread.log"
    assert logger.enable_file_logging(str(path)) is True
    logger.log("first", LogLevel.INFO, 1)
    logger.disable_file_logging()
    logger.log("second")
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert lines[0].endswith("[INFO] Thread 1: first")
    assert "\033" not in lines[0]
    assert logger.file_logging is False


def test_file_logging_fails_for_missing_directory(tmp_path):
    logger = ThreadLogger()
    assert logger.enable_file_logging(str(tmp_path / "nope" / "x.log")) is False
    assert logger.file_logging is False


def test_callback_receives_formatted_record():
    logger = ThreadLogger()
    seen = []
    logger.set_callback(seen.append)
    logger.log("ping", LogLevel.WARN)
    assert len(seen) == 1
    assert seen[0].endswith("[WARN] ping")


def test_nested_log_is_dropped(capsys):
    logger = ThreadLogger()
    logger.set_callback(lambda _line: logger.log("inner"))
    logger.log("outer")
    out = capsys.readouterr().out
    assert out.count("outer") == 1
    assert "inner" not in out


def test_failing_callback_reports_to_stderr(capsys):
    logger = ThreadLogger()

    def boom(_line):
        raise ValueError("x")

    logger.set_callback(boom)
    logger.log("msg")
    assert "[ThreadLogger] Logging failed due to exception." in capsys.readouterr().err


def test_get_logger_is_shared_and_helpers_use_it(capsys):
    assert get_logger() is get_logger()
    log_info("via helper")
    log_error("oops")
    out = capsys.readouterr().out
    assert "[INFO] via helper" in out
    assert "[ERROR] oops" in out