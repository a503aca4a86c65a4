#
# rminspect - Utils Tests
#

# Third party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from rminspect.utils import DEFAULT_TYPE_NAME, class_name


# Local Classes --------------------------------------------------------------------------------------------------------

class Plain:
    pass


class HostileClass:
    @property
    def __class__(self):
        raise RuntimeError("no class for you")


class Nameless:
    pass


Nameless.__name__ = ""


# Tests ----------------------------------------------------------------------------------------------------------------


class TestClassName:
    @pytest.mark.parametrize(
        "obj, fully_qualified_builtins, expected",
        [
            pytest.param(int, False, "int", id="builtin-class-no-fq"),
            pytest.param(10, False, "int", id="builtin-instance-no-fq"),
            pytest.param(int, True, "builtins.int", id="builtin-class-fq"),
            pytest.param("abc", True, "builtins.str", id="builtin-str-fq"),
            pytest.param(None, False, "NoneType", id="none-no-fq"),
        ],
    )
    def test_builtin_names(self, obj, fully_qualified_builtins, expected):
        """Return correct builtin class names with and without full qualification."""
        assert class_name(obj, fully_qualified_builtins=fully_qualified_builtins) == expected

    @pytest.mark.parametrize(
        "as_class",
        [
            pytest.param(True, id="class"),
            pytest.param(False, id="instance"),
        ],
    )
    def test_user_class(self, as_class):
        """User classes resolve to their short or qualified name."""
        obj = Plain if as_class else Plain()
        assert class_name(obj) == "Plain"
        assert class_name(obj, fully_qualified=True) == f"{Plain.__module__}.Plain"

    def test_builtins_not_qualified_by_user_flag(self):
        assert class_name(3.5, fully_qualified=True) == "float"

    def test_hostile_class_falls_back(self):
        """A throwing __class__ yields the default name."""
        assert class_name(HostileClass()) == DEFAULT_TYPE_NAME
        assert class_name(HostileClass(), default="Error") == "Error"

    def test_empty_name_falls_back(self):
        assert class_name(Nameless()) == "Object"
