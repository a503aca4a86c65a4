"""
rminspect utilities shared across the package.

Contains functions used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any

DEFAULT_TYPE_NAME = "Object"


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(
    obj: Any,
    fully_qualified: bool = False,
    fully_qualified_builtins: bool = False,
    default: str = DEFAULT_TYPE_NAME,
) -> str:
    """
    Get the nominal class name of an object or a class.

    Returns class name whether given an instance or the class itself.
    For example, both `class_name(10)` and `class_name(int)` return 'int'.
    Never raises: objects whose class or class name cannot be resolved
    (hostile `__class__`, non-string `__name__`) yield `default`.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, returns the fully qualified name for user objects or classes.
        fully_qualified_builtins (bool): If true, returns the fully qualified name for builtin objects or classes.
        default (str): Name returned when no name is resolvable.

    Returns:
        str: The class name.

    Examples:
        >>> class_name(10)
        'int'
        >>> class_name(10, fully_qualified_builtins=True)
        'builtins.int'
        >>> class C: ...
        >>> class_name(C())
        'C'
    """
    try:
        cls = obj if isinstance(obj, type) else obj.__class__
        name = cls.__name__
        module = cls.__module__
    except Exception:
        return default

    if not isinstance(name, str) or not name:
        return default

    qualify = fully_qualified_builtins if module == "builtins" else fully_qualified
    if qualify and isinstance(module, str) and module:
        return f"{module}.{name}"
    return name
