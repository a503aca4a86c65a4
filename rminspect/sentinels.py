"""
Sentinel objects for distinguishing between unset values, None, and other states.

This module provides a set of singleton sentinel objects used by the formatters
to represent special states in function arguments and rendering results.
All sentinels use identity checks (using 'is') rather than equality checks.

Sentinels:
    UNDEFINED: An absent value, rendered by fmt_any() as `undefined` (distinct from None/`null`)
    MISSING: Marks a value that is not present, such as an exception without a cause
    NOT_PRIMITIVE: Returned by fmt_primitive() for values that need composite rendering
    UNSET: Represents an unprovided optional argument (distinguishes from None)

Helper Functions:
    ifnotunset: Return default if value is UNSET, otherwise return value
    is_sentinel: Check whether a value is one of the sentinel singletons

Example:
    >>> def merge(depth: int | UnsetType = UNSET) -> int:
    ...     return ifnotunset(depth, default=6)
"""

from typing import Any, Callable, Final

__all__ = [
    'UNDEFINED',
    'MISSING',
    'NOT_PRIMITIVE',
    'UNSET',
    'UndefinedType',
    'MissingType',
    'NotPrimitiveType',
    'UnsetType',
    'ifnotunset',
    'is_sentinel',
]


# Base Sentinel --------------------------------------------------------------------------------------------------------

class _SentinelBase:
    """
    Base class for all sentinel objects.

    Sentinels are singleton objects optimized for identity checks.
    They provide clean representations and consistent behavior.
    """
    __slots__ = ('_name',)

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        """The sentinel name, e.g. 'MISSING'."""
        return self._name

    def __repr__(self) -> str:
        """Returns a clean string representation for debugging."""
        return f'<{self._name}>'

    def __eq__(self, other: Any) -> bool:
        """Ensures identity-based comparison."""
        return self is other

    def __hash__(self) -> int:
        """Returns a hash based on object identity."""
        return id(self)

    def __bool__(self) -> bool:
        """Returns False by default (sentinels are typically falsy)."""
        return False

    def __reduce__(self) -> tuple:
        """Ensure pickling returns the singleton instance."""
        return (self.__class__, ())


# Sentinel Types -------------------------------------------------------------------------------------------------------

class MissingType(_SentinelBase):
    """
    Sentinel type for MISSING.

    Marks a value that is not present at all, where None would be a legitimate value.
    """
    _instance: 'MissingType | None' = None

    def __new__(cls) -> 'MissingType':
        """Ensures singleton behavior."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if not hasattr(self, '_name'):
            super().__init__("MISSING")


class NotPrimitiveType(_SentinelBase):
    """
    Sentinel type for NOT_PRIMITIVE.

    Signals that a value has no one-line primitive form and must be rendered as a composite.
    """
    _instance: 'NotPrimitiveType | None' = None

    def __new__(cls) -> 'NotPrimitiveType':
        """Ensures singleton behavior."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if not hasattr(self, '_name'):
            super().__init__("NOT_PRIMITIVE")


class UndefinedType(_SentinelBase):
    """
    Sentinel type for UNDEFINED.

    The absent-value counterpart of None: None renders as `null`, UNDEFINED as `undefined`.
    """
    _instance: 'UndefinedType | None' = None

    def __new__(cls) -> 'UndefinedType':
        """Ensures singleton behavior."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if not hasattr(self, '_name'):
            super().__init__("UNDEFINED")


class UnsetType(_SentinelBase):
    """
    Sentinel type for UNSET.

    Used to distinguish between 'not provided' and 'explicitly set to None'.
    This is the most common sentinel for optional function arguments.
    """
    _instance: 'UnsetType | None' = None

    def __new__(cls) -> 'UnsetType':
        """Ensures singleton behavior."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if not hasattr(self, '_name'):
            super().__init__("UNSET")


# Sentinel Objects -----------------------------------------------------------------------------------------------------

MISSING: Final[MissingType] = MissingType()
"""
Sentinel representing a value that is not present.

Used where None is a valid value but absence must still be signalled,
e.g. an exception that carries no causal value at all.
"""

NOT_PRIMITIVE: Final[NotPrimitiveType] = NotPrimitiveType()
"""
Sentinel returned by fmt_primitive() for composite values.

Use with identity check: `if text is NOT_PRIMITIVE:`
"""

UNDEFINED: Final[UndefinedType] = UndefinedType()
"""
Sentinel representing an absent value, rendered as `undefined`.
"""

UNSET: Final[UnsetType] = UnsetType()
"""
Sentinel representing an unprovided optional argument.

Use with identity check: `if arg is UNSET:`

This is particularly useful when None is a valid input value.
"""


# Helper Functions -----------------------------------------------------------------------------------------------------

def _if_sentinel(
        value: Any,
        sentinel: Any,
        *,
        default: Any = None,
        default_factory: Callable[[], Any] | None = None
) -> Any:
    """
    Internal helper: return value if it doesn't match sentinel, otherwise return default.

    Raises:
        ValueError: If both default and default_factory are provided.
    """
    if value is not sentinel:
        return value

    if default_factory is not None and default is not None:
        raise ValueError("Cannot specify both default and default_factory")

    if default_factory is not None:
        return default_factory()

    return default


def ifnotunset(value: Any, *, default: Any = None, default_factory: Callable[[], Any] | None = None) -> Any:
    """
    Return value if it's not UNSET, otherwise return default.

    Args:
        value: The value to check. If not UNSET, this value is returned.
        default: The fallback value when value is UNSET.
        default_factory: Callable returning the fallback value. Takes precedence over default.

    Returns:
        The value itself if not UNSET, otherwise the default (or result of default_factory).

    Raises:
        ValueError: If both default and default_factory are provided.

    Example:
        >>> ifnotunset(UNSET, default=6)
        6
        >>> ifnotunset(None, default=6) is None
        True
    """
    return _if_sentinel(value, UNSET, default=default, default_factory=default_factory)


def is_sentinel(value: Any) -> bool:
    """Check whether value is one of the sentinel singletons."""
    return isinstance(value, _SentinelBase)
