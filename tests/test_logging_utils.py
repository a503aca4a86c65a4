#
# rminspect - Logging Utils Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import logging
import sys

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from rminspect.formatters import InspectOptions
from rminspect.logging_utils import InspectLogFormatter, setup_logging


# Local Methods --------------------------------------------------------------------------------------------------------

def make_record(msg, args=(), exc_info=None) -> logging.LogRecord:
    return logging.LogRecord("rminspect.test", logging.INFO, __file__, 1, msg, args, exc_info)


def raised_exc_info(exc: BaseException):
    try:
        raise exc
    except BaseException:
        return sys.exc_info()


# Tests ----------------------------------------------------------------------------------------------------------------

class TestInspectLogFormatter:
    def test_composite_args(self):
        """Composite arguments are inspected, primitives keep %-formatting."""
        formatter = InspectLogFormatter("%(message)s")
        record = make_record("rows=%s count=%d name=%s", ({"a": [1]}, 3, "plain"))
        assert formatter.format(record) == "rows={ a: [ 1 ] } count=3 name=plain"

    def test_mapping_args(self):
        formatter = InspectLogFormatter("%(message)s")
        record = make_record("user=%(user)s", ({"user": {"id": 1}},))
        assert formatter.format(record) == "user={ id: 1 }"

    def test_cyclic_arg(self):
        formatter = InspectLogFormatter("%(message)s")
        data = {"k": 1}
        data["me"] = data
        assert formatter.format(make_record("state %s", (data,))) == "state { k: 1, me: [Circular] }"

    def test_record_not_modified(self):
        formatter = InspectLogFormatter("%(message)s")
        args = ([1, 2],)
        record = make_record("%s", args)
        formatter.format(record)
        assert record.args is args
        assert record.exc_text is None

    def test_options_depth(self):
        formatter = InspectLogFormatter("%(message)s", options={"depth": 1})
        assert formatter.format(make_record("%s", ({"a": {"b": 1}},))) == "{ a: [Object] }"

    def test_exception_rendered(self):
        formatter = InspectLogFormatter("%(message)s", options=InspectOptions(traceback=False))
        exc = ValueError("boom")
        exc.code = "E1"
        record = make_record("failed", exc_info=raised_exc_info(exc))
        assert formatter.format(record) == 'failed\nValueError: boom\n{ code: "E1" }'

    def test_exception_text_cached_by_other_formatter(self):
        """A traceback cached on the record by a stock formatter is not reused."""
        exc = ValueError("boom")
        exc.code = "E1"
        record = make_record("failed", exc_info=raised_exc_info(exc))
        logging.Formatter("%(message)s").format(record)
        assert record.exc_text.startswith("Traceback")

        formatter = InspectLogFormatter("%(message)s", options=InspectOptions(traceback=False))
        assert formatter.format(record) == 'failed\nValueError: boom\n{ code: "E1" }'

    def test_exception_traceback(self):
        formatter = InspectLogFormatter("%(message)s")
        record = make_record("failed", exc_info=raised_exc_info(KeyError("k")))
        out = formatter.format(record)
        assert out.startswith("failed\nKeyError: 'k'\n  File ")
        assert "in raised_exc_info" in out


class TestSetupLogging:
    @pytest.mark.parametrize(
        "level, expected",
        [
            pytest.param("debug", logging.DEBUG, id="debug"),
            pytest.param("WARNING", logging.WARNING, id="warning"),
            pytest.param("bogus", logging.INFO, id="unknown"),
        ],
    )
    def test_root_configured(self, root_logger, level, expected):
        setup_logging(level=level, options=InspectOptions.compact())

        assert root_logger.level == expected
        assert len(root_logger.handlers) == 1
        formatter = root_logger.handlers[0].formatter
        assert isinstance(formatter, InspectLogFormatter)
        assert formatter.options == InspectOptions.compact()
