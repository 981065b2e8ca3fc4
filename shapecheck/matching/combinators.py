"""Combinators: factories that build predicate patterns from other patterns.

Each combinator returns a function (data, root, path) that can be used
anywhere a pattern is expected, including inside other combinators.

Usage:
    pattern = {
        "name": required(str),
        "nickname": optional(str),
        "homepage": recommended(valid_url),
        "role": one_of("admin", "user"),
        "tags": any_of("a", "b", "c"),
    }
"""

from typing import Any, Callable, Union

import structlog

from shapecheck.config import get_settings
from shapecheck.matching.engine import matches
from shapecheck.matching.models import MatchResult, Problem, ProblemKind, make_problem
from shapecheck.matching.patterns import is_sequence

logger = structlog.get_logger()

Predicate = Callable[[Any, Any, str], Union[MatchResult, Problem]]


def optional(pattern: Any = None) -> Predicate:
    """Match pattern only when data is present."""

    def check_optional(data: Any, root: Any, path: str) -> MatchResult:
        if data is None:
            return False
        return matches(data, pattern, root, path)

    return check_optional


def required(pattern: Any = None) -> Predicate:
    """Data must be present, and match pattern when one is given."""

    def check_required(data: Any, root: Any, path: str) -> Union[MatchResult, Problem]:
        if data is None:
            return make_problem(
                "data is required",
                data,
                pattern if pattern is not None else "any value",
                path,
                kind=ProblemKind.PRESENCE_VIOLATION,
            )
        return matches(data, pattern, root, path)

    return check_required


def recommended(pattern: Any = None) -> Predicate:
    """Like optional(), but a missing value is logged as a warning."""

    def check_recommended(data: Any, root: Any, path: str) -> MatchResult:
        if data is None:
            if get_settings().WARN_RECOMMENDED:
                logger.warning(
                    "recommended_value_missing",
                    path=path,
                    expected=repr(pattern) if pattern is not None else "any value",
                )
            return False
        return matches(data, pattern, root, path)

    return check_recommended


def one_of(*patterns: Any) -> Predicate:
    """Data must match at least one of the patterns. Tried in order."""

    def check_one_of(data: Any, root: Any, path: str) -> Union[bool, Problem]:
        for pattern in patterns:
            if not matches(data, pattern, root, path):
                return False
        return make_problem(
            "data does not match oneOf patterns",
            data,
            list(patterns),
            path,
            kind=ProblemKind.COMBINATOR_VIOLATION,
        )

    return check_one_of


def any_of(*patterns: Any) -> Predicate:
    """Data must be a list whose every element matches one of the patterns.

    Only the first offending element is reported.
    """
    element_check = one_of(*patterns)

    def check_any_of(data: Any, root: Any, path: str) -> Union[bool, Problem]:
        if not is_sequence(data):
            return make_problem(
                "data is not an array",
                data,
                "anyOf",
                path,
                kind=ProblemKind.STRUCTURAL_MISMATCH,
            )
        for index, value in enumerate(data):
            element_path = f"{path}[{index}]"
            if element_check(value, root, element_path):
                return make_problem(
                    "data does not match anyOf patterns",
                    value,
                    list(patterns),
                    element_path,
                    kind=ProblemKind.COMBINATOR_VIOLATION,
                )
        return False

    return check_any_of


def all_of(*patterns: Any) -> Predicate:
    """Data must match every pattern.

    Failures are reported as a single problem, with the individual failures
    kept in its subproblems.
    """

    def check_all_of(data: Any, root: Any, path: str) -> Union[bool, Problem]:
        subproblems: list[Problem] = []
        for pattern in patterns:
            result = matches(data, pattern, root, path)
            if result:
                subproblems.extend(result)

        if not subproblems:
            return False
        return make_problem(
            "data does not match allOf patterns",
            data,
            list(patterns),
            path,
            subproblems=subproblems,
            kind=ProblemKind.COMBINATOR_VIOLATION,
        )

    return check_all_of


def not_(pattern: Any) -> Predicate:
    """Data must not match pattern."""

    def check_not(data: Any, root: Any, path: str) -> Union[bool, Problem]:
        if matches(data, pattern, root, path):
            return False
        return make_problem(
            "data matches pattern, when required not to",
            data,
            pattern,
            path,
            kind=ProblemKind.COMBINATOR_VIOLATION,
        )

    return check_not


def instance_of(cls: Union[type, tuple[type, ...]]) -> Predicate:
    """Data must be an instance of cls (or of one of a tuple of classes)."""

    def check_instance_of(data: Any, root: Any, path: str) -> Union[bool, Problem]:
        if isinstance(data, cls):
            return False
        return make_problem(
            "data is not an instanceof pattern",
            data,
            cls,
            path,
            kind=ProblemKind.COMBINATOR_VIOLATION,
        )

    return check_instance_of
