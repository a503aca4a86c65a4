#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import logging
from typing import Callable

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def raise_caught() -> Callable[[BaseException], BaseException]:
    """Raise the given exception and return it with its traceback attached."""

    def _raise(exc: BaseException) -> BaseException:
        try:
            raise exc
        except BaseException as caught:
            return caught

    return _raise


@pytest.fixture
def root_logger():
    """Yield the root logger and restore its level and handlers afterwards."""
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield root
    root.setLevel(level)
    root.handlers[:] = handlers
