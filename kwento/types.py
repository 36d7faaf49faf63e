"""Runtime values for Kwento.

Kwento values are plain Python objects, one Python type per value tag:

=========  =======================
tag        Python representation
=========  =======================
nil        ``None``
boolean    ``bool``
number     ``float``
string     ``str``
array      `ArrayVal`
function   `KwentoCallable`
=========  =======================

`type_name` reports the tag of a value. Operators check tags explicitly
before they touch a value; note that ``bool`` is kept apart from numbers
even though Python treats it as an ``int``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List

from .callables import KwentoCallable


@dataclass(eq=False)
class ArrayVal:
    """A mutable, reference-shared sequence of values.

    Two variables bound to the same ArrayVal see each other's writes.
    Equality between arrays is decided by `values_equal`, not `==`.
    """
    items: List[Any] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return f"Array({self.items!r})"


def type_name(value: Any) -> str:
    """Return the Kwento tag name of a runtime value."""
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, float):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, ArrayVal):
        return 'array'
    if isinstance(value, KwentoCallable):
        return 'function'
    return type(value).__name__


def is_number(value: Any) -> bool:
    return isinstance(value, float) and not isinstance(value, bool)


def is_truthy(value: Any) -> bool:
    """Only `false` and `nil` are falsy; 0 and "" are truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def values_equal(a: Any, b: Any) -> bool:
    """Kwento `==`: no coercion between tags, nil equals only nil."""
    if a is None or b is None:
        return a is None and b is None
    if type_name(a) != type_name(b):
        return False
    if isinstance(a, ArrayVal):
        if a is b:
            return True
        if len(a.items) != len(b.items):
            return False
        return all(values_equal(x, y) for x, y in zip(a.items, b.items))
    if isinstance(a, KwentoCallable):
        return a is b
    return a == b


def format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def to_string(value: Any) -> str:
    """Convert a Kwento value to the text `print` shows for it."""
    if value is None:
        return 'nil'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, ArrayVal):
        return '[' + ', '.join(to_string(item) for item in value.items) + ']'
    return str(value)
