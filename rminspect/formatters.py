"""
Robust value formatter for development, debugging and logging.

Renders an arbitrary Python value (primitive, container, object, callable,
exception, or cyclic graph) into one deterministic, human-readable string.
Rendering is recursive, depth-bounded and cycle-safe, and never raises:
broken __repr__, throwing getters and hostile mappings are rendered inline
as `[Thrown: ...]` placeholders while the remaining members still render.

The fmt_any() function classifies each value once per step (see Kind)
and dispatches to the primitive, composite or exception renderer.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import array
import collections.abc as abc
import datetime
import functools
import inspect
import ipaddress
import json
import math
import numbers
import traceback
import uuid

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum, unique
from pathlib import PurePath
from typing import Any, Callable, Iterable, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .sentinels import MISSING, NOT_PRIMITIVE, UNDEFINED, UNSET, NotPrimitiveType, UnsetType, ifnotunset, is_sentinel
from .utils import DEFAULT_TYPE_NAME, class_name

DEFAULT_DEPTH = 6

CIRCULAR = "[Circular]"
ARRAY_PLACEHOLDER = "[Array]"

# Values without useful own members that are rendered by repr()
OPAQUE_TYPES = (
    datetime.date,  # Includes datetime.datetime
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    uuid.UUID,
    PurePath,
    ipaddress.IPv4Address,
    ipaddress.IPv6Address,
    ipaddress.IPv4Network,
    ipaddress.IPv6Network,
    ipaddress.IPv4Interface,
    ipaddress.IPv6Interface,
    range,
)

ARRAY_TYPES = (
    abc.Sequence,
    abc.Set,
    abc.MappingView,
    array.array,
    memoryview,
)


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class Kind(str, Enum):
    """
    The closed set of value kinds fmt_any() dispatches on.

    Members are str subclasses, so they compare equal to their plain names.
    """
    PRIMITIVE = "primitive"
    CALLABLE = "callable"
    ERROR = "error"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True)
class InspectOptions:
    """
    Rendering controls for fmt_any().

    Attributes:
        depth: Maximum recursion depth. The top-level value is at depth 0, so
            depth=0 truncates a top-level composite to its placeholder.
        traceback: Include formatted traceback frames in exception headers.
        mark_repeats: Keep every rendered composite marked for the whole call,
            so a repeated (not only a cyclic) reference renders as `[Circular]`.
            By default only ancestors on the current path are circular.
        fully_qualified: Use `module.Class` type names for user classes.

    Example:
        >>> fmt_any({"a": {"b": 1}}, InspectOptions(depth=1))
        '{ a: [Object] }'

    Raises:
        TypeError: If a field has the wrong type.
        ValueError: If depth is negative.
    """
    depth: int = DEFAULT_DEPTH
    traceback: bool = True
    mark_repeats: bool = False
    fully_qualified: bool = False

    def __post_init__(self):
        """Validate fields"""

        if isinstance(self.depth, bool) or not isinstance(self.depth, int):
            raise TypeError(f"depth must be an int but found {fmt_any(self.depth)}")
        if self.depth < 0:
            raise ValueError(f"depth must be non-negative but found {fmt_any(self.depth)}")

        for name in ("traceback", "mark_repeats", "fully_qualified"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise TypeError(f"{name} must be a bool but found {fmt_any(value)}")

    @classmethod
    def compact(cls) -> Self:
        """
        Shallow rendering without traceback frames, for one-line log records.
        """
        return cls(depth=2, traceback=False)

    @classmethod
    def debug(cls) -> Self:
        """
        Deep rendering with traceback frames, for interactive debugging.
        """
        return cls(depth=10, traceback=True)

    def merge(self,
              depth: int | UnsetType = UNSET,
              traceback: bool | UnsetType = UNSET,
              mark_repeats: bool | UnsetType = UNSET,
              fully_qualified: bool | UnsetType = UNSET,
              ) -> "InspectOptions":
        """
        Create a new InspectOptions instance with merged configuration options.

        Parameters not provided (UNSET) are inherited from the current instance.
        """
        return InspectOptions(
            depth=ifnotunset(depth, default=self.depth),
            traceback=ifnotunset(traceback, default=self.traceback),
            mark_repeats=ifnotunset(mark_repeats, default=self.mark_repeats),
            fully_qualified=ifnotunset(fully_qualified, default=self.fully_qualified),
        )


class _Traversal:
    """
    Traversal state of a single top-level fmt_any() call.

    `visiting` maps id() to the value itself: the reference keeps every marked
    value alive for the duration of the call, so ids cannot be reused.
    """

    def __init__(self, options: InspectOptions):
        self.options = options
        self.max_depth = options.depth
        self.visiting: dict[int, Any] = {}

    def fmt(self, value: Any, depth: int = 0) -> str:
        text = fmt_primitive(value)
        if text is not NOT_PRIMITIVE:
            return text

        kind = value_kind(value)
        key = id(value)
        if key in self.visiting:
            return CIRCULAR

        if depth >= self.max_depth:
            if kind is Kind.ERROR:
                return self.error_header(value)
            if kind is Kind.ARRAY:
                return ARRAY_PLACEHOLDER
            return f"[{self.type_name(value)}]"

        self.visiting[key] = value
        try:
            if kind is Kind.ERROR:
                return self.fmt_error(value, depth)
            if kind is Kind.ARRAY:
                return self.fmt_array(value, depth)
            return self.fmt_object(value, depth)
        finally:
            if not self.options.mark_repeats:
                del self.visiting[key]

    def fmt_child(self, value: Any, depth: int) -> str:
        """Render a member value; failures are rendered in place."""
        try:
            return self.fmt(value, depth)
        except Exception as exc:
            return fmt_thrown(exc)

    def fmt_member(self, read: Callable[[Any], Any], key: Any, depth: int) -> str:
        """Read and render a member; a throwing read is rendered in place."""
        try:
            value = read(key)
        except Exception as exc:
            return fmt_thrown(exc)
        return self.fmt_child(value, depth)

    def fmt_array(self, arr: Iterable[Any], depth: int) -> str:
        try:
            # Multi-dimensional views are not iterable
            items = arr.tolist() if isinstance(arr, memoryview) else list(arr)
        except Exception as exc:
            return fmt_thrown(exc)

        parts = [self.fmt_child(item, depth + 1) for item in items]
        if isinstance(arr, abc.Set) and not isinstance(arr, abc.MappingView):
            # Set iteration order is not stable across runs
            parts.sort()

        prefix = "" if type(arr) is list else f"{self.type_name(arr)} "
        if not parts:
            return f"{prefix}[ ]"
        return prefix + "[ " + ", ".join(parts) + " ]"

    def fmt_object(self, obj: Any, depth: int) -> str:
        type_name = self.type_name(obj)
        try:
            keys, read = _own_members(obj)
        except Exception as exc:
            return fmt_thrown(exc)

        entries = [
            f"{_fmt_key(key)}: {self.fmt_member(read, key, depth + 1)}"
            for key in keys
        ]

        if not entries:
            return "{}" if type_name == DEFAULT_TYPE_NAME else f"{type_name} {{}}"
        body = "{ " + ", ".join(entries) + " }"
        return body if type_name == DEFAULT_TYPE_NAME else f"{type_name} {body}"

    def fmt_error(self, exc: BaseException, depth: int) -> str:
        header = self.error_header(exc)

        details = []
        source = None
        try:
            source = _cause_source(exc)
            if source is not None:
                details.append(f"cause: {self.fmt_child(getattr(exc, source), depth + 1)}")
        except Exception as err:
            details.append(f"cause: {fmt_thrown(err)}")

        try:
            attrs = vars(exc)
            # An own `cause` that supplied the causal value is not repeated
            keys = [key for key in attrs if not (key == "cause" and source == "cause")]
        except Exception as err:
            details.append(fmt_thrown(err))
            attrs, keys = {}, []

        read = _member_reader(exc, attrs)
        details.extend(f"{_fmt_key(key)}: {self.fmt_member(read, key, depth + 1)}" for key in keys)

        if not details:
            return header
        return f"{header}\n{{ {', '.join(details)} }}"

    def error_header(self, exc: BaseException) -> str:
        return _error_header(
            exc, traceback=self.options.traceback, fully_qualified=self.options.fully_qualified
        )

    def type_name(self, obj: Any) -> str:
        if type(obj) is dict:
            return DEFAULT_TYPE_NAME
        return class_name(obj, fully_qualified=self.options.fully_qualified)


# Methods --------------------------------------------------------------------------------------------------------------


def fmt_any(value: Any, options: Any = None) -> str:
    """Format any value for debugging, logging, and exception messages.

    Main entry point. Classifies the value and renders it recursively,
    with cycle detection and a depth bound shared by all composite kinds.

    Args:
        value: Any Python value.
        options: An InspectOptions, a mapping with a "depth" key, or an object
            with a `depth` attribute. A finite real depth is floored and
            clamped to >= 0; any other shape falls back to depth 6.

    Returns:
        The rendered text. Never raises.

    Rendering:
        - None → `null`, UNDEFINED → `undefined`, str → JSON string literal
        - bool → `true`/`false`, numbers → canonical text
        - enum members and sentinels → `Symbol(...)`
        - callables → `[Function: name]` or `[Function]`
        - list → `[ 1, 2 ]`, other sequences and sets → `tuple [ 1, 2 ]`
        - dict → `{ a: 1 }`, other objects → `TypeName { a: 1 }`
        - exceptions → `Name: message`, trace frames, then `{ cause: ..., attr: ... }`

    Examples:
        >>> fmt_any({"key": "value", "items": [1, None]})
        '{ key: "value", items: [ 1, null ] }'

        >>> fmt_any(TypeError("bad"))
        'TypeError: bad'

        >>> d = {"answer": 42}
        >>> d["self"] = d
        >>> fmt_any(d)
        '{ answer: 42, self: [Circular] }'

    See Also:
        fmt_primitive: Render a leaf value.
        fmt_error_chain: Render an exception and its causes line by line.
    """
    traversal = _Traversal(resolve_options(options))
    try:
        return traversal.fmt(value)
    except Exception as exc:
        return fmt_thrown(exc)


def fmt_error_chain(error: Any, max_depth: Any = DEFAULT_DEPTH, *, traceback: bool = True) -> str:
    """Format an exception and its chain of causes, one link per line.

    The first line is the exception header (summary or trace); each following
    link is prefixed with "Caused by: ". A link that is not an exception is
    rendered with str() and ends the chain; a link seen before is followed by
    "Caused by: ... (cycle)".

    Args:
        error: The exception (or any value) to format.
        max_depth: Maximum number of links shown, at least 1. A falsy or
            non-numeric value selects the default of 6.
        traceback: Include traceback frames in each link header.

    Returns:
        The chain text. Never raises.

    Examples:
        >>> err = RuntimeError("login failed")
        >>> err.__cause__ = TimeoutError("mfa timeout")
        >>> print(fmt_error_chain(err))
        RuntimeError: login failed
        Caused by: TimeoutError: mfa timeout
    """
    try:
        limit = _coerce_depth(max_depth or DEFAULT_DEPTH)
    except Exception:
        limit = None
    limit = max(1, DEFAULT_DEPTH if limit is None else limit)

    lines: list[str] = []
    seen: dict[int, Any] = {}
    current = error
    for depth in range(limit):
        if isinstance(current, BaseException):
            line = _error_header(current, traceback=traceback)
        else:
            line = _safe_str(current)
        lines.append(("Caused by: " if depth else "") + (line or "(unknown error)"))

        if not isinstance(current, BaseException):
            break
        if id(current) in seen:
            lines.append("Caused by: ... (cycle)")
            break
        seen[id(current)] = current

        try:
            current = _error_cause(current)
        except Exception:
            break
        if current is MISSING:
            break

    return "\n".join(lines)


def fmt_primitive(value: Any) -> str | NotPrimitiveType:
    """Format a leaf value in its canonical one-line form.

    Returns:
        The rendered text, or NOT_PRIMITIVE for values that need composite
        rendering. Never raises: a failing repr() renders as `[Thrown: ...]`.

    Examples:
        >>> fmt_primitive('a"b')
        '"a\\\\"b"'
        >>> fmt_primitive(True)
        'true'
        >>> fmt_primitive(float("inf"))
        'Infinity'
        >>> fmt_primitive(len)
        '[Function: len]'
        >>> fmt_primitive([]) is NOT_PRIMITIVE
        True
    """
    try:
        return _fmt_primitive(value)
    except Exception as exc:
        return fmt_thrown(exc)


def fmt_thrown(exc: BaseException) -> str:
    """Placeholder for a failure caught while rendering, e.g. `[Thrown: KeyError: 'x']`."""
    return f"[Thrown: {_exception_summary(exc)}]"


def resolve_options(options: Any = None) -> InspectOptions:
    """Normalize the `options` argument of fmt_any() into InspectOptions.

    Only the depth is taken from mappings and plain objects. Never raises.

    Examples:
        >>> resolve_options({"depth": 2.7}).depth
        2
        >>> resolve_options({"depth": -3}).depth
        0
        >>> resolve_options({"depth": float("nan")}).depth
        6
        >>> resolve_options("depth=2").depth
        6
    """
    if isinstance(options, InspectOptions):
        return options
    if options is None:
        return InspectOptions()

    try:
        if isinstance(options, abc.Mapping):
            raw = options.get("depth", UNSET)
        else:
            raw = getattr(options, "depth", UNSET)
    except Exception:
        raw = UNSET

    depth = _coerce_depth(raw)
    return InspectOptions() if depth is None else InspectOptions(depth=depth)


def value_kind(value: Any) -> Kind:
    """Classify a value into one of the Kind members."""
    if isinstance(value, BaseException):
        return Kind.ERROR
    if _is_callable(value):
        return Kind.CALLABLE
    if _is_primitive(value):
        return Kind.PRIMITIVE
    if _is_named_tuple(value) or isinstance(value, abc.Mapping):
        return Kind.OBJECT
    if isinstance(value, ARRAY_TYPES):
        return Kind.ARRAY
    return Kind.OBJECT


# Private Methods ------------------------------------------------------------------------------------------------------


def _coerce_depth(raw: Any) -> int | None:
    """Floor and clamp a finite real depth; None for any other value."""
    if isinstance(raw, bool) or not isinstance(raw, (numbers.Real, Decimal)):
        return None
    try:
        if not math.isfinite(raw):
            return None
        return max(0, math.floor(raw))
    except (TypeError, ValueError, OverflowError):
        return None


def _cause_source(exc: BaseException) -> str | None:
    """
    Name of the attribute holding the causal value of an exception, or None.

    Explicit `__cause__` first, then an own `cause` attribute, then the
    implicit `__context__` unless suppressed by `raise ... from`.
    """
    if exc.__cause__ is not None:
        return "__cause__"
    if "cause" in vars(exc):
        return "cause"
    if exc.__context__ is not None and not exc.__suppress_context__:
        return "__context__"
    return None


def _error_cause(exc: BaseException) -> Any:
    """The causal value of an exception, or MISSING."""
    source = _cause_source(exc)
    return MISSING if source is None else getattr(exc, source)


def _error_header(exc: BaseException, *, traceback: bool = True, fully_qualified: bool = False) -> str:
    """Exception summary, followed by trace frames when present."""
    summary = _exception_summary(exc, fully_qualified=fully_qualified)
    trace = _trace_text(exc) if traceback else ""
    if not trace.strip():
        return summary
    return trace if trace.startswith(summary) else f"{summary}\n{trace}"


def _exception_summary(exc: BaseException, fully_qualified: bool = False) -> str:
    """`Name: message`, or `Name` alone for an empty (or unprintable) message."""
    name = class_name(exc, fully_qualified=fully_qualified, default="Error")
    try:
        message = str(exc)
    except Exception:
        message = ""
    return f"{name}: {message}" if message else name


def _fmt_callable(value: Any) -> str:
    name = getattr(value, "__name__", None)
    if not isinstance(name, str) or not name or name == "<lambda>":
        return "[Function]"
    return f"[Function: {name}]"


def _fmt_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return float.__repr__(value)


def _fmt_key(key: Any) -> str:
    """Member key text: bare for str keys, bracketed for any other key."""
    if isinstance(key, str):
        return key
    text = fmt_primitive(key)
    if text is NOT_PRIMITIVE:
        text = _safe_repr(key)
    return f"[{text}]"


def _fmt_primitive(value: Any) -> str | NotPrimitiveType:
    # Order matters: bool before int, Enum before str and int
    if value is None:
        return "null"
    if value is UNDEFINED:
        return "undefined"
    if isinstance(value, Enum):
        return f"Symbol({class_name(value)}.{value.name})"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_sentinel(value):
        return f"Symbol({value.name})"
    if value is Ellipsis or value is NotImplemented:
        return f"Symbol({value!r})"
    if isinstance(value, float):
        return _fmt_float(value)
    if isinstance(value, numbers.Number):
        return str(value)
    if isinstance(value, (bytes, bytearray)) or isinstance(value, OPAQUE_TYPES):
        return repr(value)
    if _is_callable(value):
        return _fmt_callable(value)
    return NOT_PRIMITIVE


def _is_callable(value: Any) -> bool:
    return inspect.isroutine(value) or isinstance(value, (type, functools.partial))


def _is_named_tuple(value: Any) -> bool:
    return isinstance(value, tuple) and hasattr(type(value), "_fields")


def _is_primitive(value: Any) -> bool:
    return (
        value is None
        or value is Ellipsis
        or value is NotImplemented
        or is_sentinel(value)
        or isinstance(value, (str, bytes, bytearray, numbers.Number, Enum))
        or isinstance(value, OPAQUE_TYPES)
    )


def _own_members(obj: Any) -> tuple[list[Any], Callable[[Any], Any]]:
    """
    Own keys of a composite and the reader for their values.

    Mappings expose their keys; named tuples their fields; other objects their
    instance `__dict__` followed by the `__slots__` members that are set.
    """
    if isinstance(obj, abc.Mapping):
        return list(obj.keys()), obj.__getitem__

    if _is_named_tuple(obj):
        return list(type(obj)._fields), functools.partial(getattr, obj)

    keys = []
    attrs = getattr(obj, "__dict__", None)
    if isinstance(attrs, abc.Mapping):
        keys.extend(attrs.keys())
    else:
        attrs = {}

    for slot in _slot_names(type(obj)):
        if slot not in keys and _slot_is_set(obj, slot):
            keys.append(slot)
    return keys, _member_reader(obj, attrs)


def _member_reader(obj: Any, attrs: abc.Mapping) -> Callable[[Any], Any]:
    """
    Reader for instance members: attribute access for str names, so custom
    __getattribute__ and descriptors apply, and direct `__dict__` lookup for
    keys that are not valid attribute names.
    """

    def read(key: Any) -> Any:
        if isinstance(key, str):
            return getattr(obj, key)
        return attrs[key]

    return read


def _safe_repr(obj: Any) -> str:
    """
    Defensive repr() call - handle broken __repr__ methods gracefully
    """
    try:
        return repr(obj)
    except Exception as exc:
        return fmt_thrown(exc)


def _safe_str(obj: Any) -> str:
    try:
        return str(obj)
    except Exception as exc:
        return fmt_thrown(exc)


def _slot_is_set(obj: Any, name: str) -> bool:
    """Unset slots raise AttributeError; any other failure is rendered later."""
    try:
        getattr(obj, name)
    except AttributeError:
        return False
    except Exception:
        return True
    return True


def _slot_names(cls: type) -> list[str]:
    names = []
    for klass in cls.__mro__:
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name not in ("__dict__", "__weakref__") and name not in names:
                names.append(name)
    return names


def _trace_text(exc: BaseException) -> str:
    tb = exc.__traceback__
    if tb is None:
        return ""
    try:
        return "".join(traceback.format_tb(tb)).rstrip("\n")
    except Exception:
        # If traceback extraction fails, continue without it
        return ""
