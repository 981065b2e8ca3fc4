"""Pattern classification: decides once which variant a pattern value is.

Patterns are ordinary Python values, so the variant is read off the value's
runtime shape. Order matters: the type tags are classes and therefore callable,
so they have to be recognized before the predicate check.
"""

import numbers
import re
from collections.abc import Mapping
from enum import Enum
from typing import Any

# The three type tags, compared by identity
Boolean = bool
Number = numbers.Number
String = str

TYPE_TAGS = (Boolean, Number, String)


class PatternKind(str, Enum):
    """The closed set of pattern variants."""

    UNDEFINED = "undefined"  # None: matches anything
    TYPE_TAG = "type_tag"
    REGEX = "regex"
    PREDICATE = "predicate"
    SEQUENCE = "sequence"
    STRUCT = "struct"
    EXACT = "exact"


def is_type_tag(pattern: Any) -> bool:
    return any(pattern is tag for tag in TYPE_TAGS)


def is_sequence(value: Any) -> bool:
    """Lists and tuples are sequences; strings and bytes are not."""
    return isinstance(value, (list, tuple))


def classify(pattern: Any) -> PatternKind:
    """Return the variant of a pattern value."""
    if pattern is None:
        return PatternKind.UNDEFINED
    if is_type_tag(pattern):
        return PatternKind.TYPE_TAG
    if isinstance(pattern, re.Pattern):
        return PatternKind.REGEX
    # Any other class is compared as a value, not called
    if callable(pattern) and not isinstance(pattern, type):
        return PatternKind.PREDICATE
    if is_sequence(pattern):
        return PatternKind.SEQUENCE
    if isinstance(pattern, Mapping):
        return PatternKind.STRUCT
    return PatternKind.EXACT
