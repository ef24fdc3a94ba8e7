import io

from crosswind.logger import Logger, LogLevel


def test_name():
    assert Logger().name() == "Logger"


def test_uninitialised_logger_writes_nothing_and_does_not_fail():
    log = Logger()
    log.critical("ignored")
    assert log.name() == Logger.SERVICE_NAME


def test_info_is_written_with_formatting():
    out = io.StringIO()
    log = Logger()
    log.init(out, LogLevel.INFO)
    log.info("value=%d\n", 5)
    assert out.getvalue() == "value=5\n"


def test_debug_is_filtered_at_info_level():
    out = io.StringIO()
    log = Logger()
    log.init(out, LogLevel.INFO)
    log.debug("hidden")
    log.info("shown")
    assert out.getvalue() == "shown"


def test_more_severe_levels_pass():
    out = io.StringIO()
    log = Logger()
    log.init(out, LogLevel.INFO)
    log.warn("w")
    log.error("e")
    log.critical("c")
    assert out.getvalue() == "wec"


def test_warn_level_filters_info():
    out = io.StringIO()
    log = Logger()
    log.init(out, LogLevel.WARN)
    log.info("info")
    log.error("error")
    assert out.getvalue() == "error"


def test_suspend_and_resume():
    out = io.StringIO()
    log = Logger()
    log.init(out, LogLevel.INFO)
    log.suspend()
    log.info("dropped")
    assert out.getvalue() == ""
    log.resume()
    log.info("kept")
    assert out.getvalue() == "kept"


def test_percent_escape_without_args():
    out = io.StringIO()
    log = Logger()
    log.init(out, LogLevel.INFO)
    log.info("100%%")
    assert out.getvalue() == "100%"


def test_default_stream_is_stdout(capsys):
    log = Logger()
    log.init()
    log.info("to stdout")
    assert capsys.readouterr().out == "to stdout"


def test_level_ordering():
    levels = [LogLevel(value) for value in range(5)]
    assert levels == [LogLevel.CRITICAL, LogLevel.ERROR, LogLevel.WARN, LogLevel.INFO, LogLevel.DEBUG]
    assert sorted(reversed(levels)) == levels