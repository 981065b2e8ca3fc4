"""Matching engine: recursive evaluation of data against a pattern.

This is the main entry point for shape validation. matches() classifies the
pattern, hands it to the matcher for that variant, and returns either False
or the flat, ordered list of Problems found.

Usage:
    from shapecheck import matches, required, valid_url

    problems = matches(payload, {"client_id": required(str), "redirect_uris": [valid_url]})
    if problems:
        # Every problem carries a root-relative path like ".redirect_uris[1]"
"""

import inspect
import time
from collections.abc import Iterable, Mapping
from typing import Any, Callable

import structlog

from shapecheck.matching.models import (
    MatchReport,
    MatchResult,
    Problem,
    ProblemKind,
    Problems,
    as_result,
    make_problem,
)
from shapecheck.matching.patterns import (
    Boolean,
    Number,
    PatternKind,
    classify,
    is_sequence,
)

logger = structlog.get_logger()

_ROOT_IS_DATA = object()
_SCALARS = (str, bytes, bytearray, int, float, complex, bool)


def matches(data: Any, pattern: Any = None, root: Any = _ROOT_IS_DATA, path: str = "") -> MatchResult:
    """Match data against a pattern.

    Args:
        data: The value to check. Missing values are None.
        pattern: Any pattern value. None (omitted) matches everything.
        root: Top-level data handed to predicates, defaults to data itself
        path: Location of data inside root, "" at the top

    Returns:
        False if data conforms, otherwise a non-empty list of Problems
    """
    if root is _ROOT_IS_DATA:
        root = data
    matcher = _MATCHERS[classify(pattern)]
    return as_result(matcher(data, pattern, root, path))


def check(data: Any, pattern: Any = None) -> MatchReport:
    """Match data against a pattern and summarize the outcome in a report."""
    start_time = time.perf_counter()

    report = MatchReport.build(matches(data, pattern))

    logger.debug(
        "match_complete",
        passed=report.passed,
        summary=report.summary,
        total_problems=len(report.problems),
        duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
    )
    return report


# ── Variant matchers ──
# Each returns a (possibly empty) list of Problems.


def _match_undefined(data: Any, pattern: Any, root: Any, path: str) -> Problems:
    return []


def _match_type_tag(data: Any, pattern: Any, root: Any, path: str) -> Problems:
    if pattern is Boolean:
        if not isinstance(data, bool):
            return [make_problem("data is not a boolean", data, pattern, path, kind=ProblemKind.TYPE_MISMATCH)]
        return []

    if pattern is Number:
        # bool subclasses int, but a boolean is not a number here
        if isinstance(data, bool) or not isinstance(data, Number):
            return [make_problem("data is not a number", data, pattern, path, kind=ProblemKind.TYPE_MISMATCH)]
        return []

    if not isinstance(data, str):
        return [make_problem("data is not a string", data, pattern, path, kind=ProblemKind.TYPE_MISMATCH)]
    if data == "":
        return [make_problem(
            "data is an empty string, which is not allowed",
            data, pattern, path,
            kind=ProblemKind.STRUCTURAL_MISMATCH,
        )]
    return []


def _match_regex(data: Any, pattern: Any, root: Any, path: str) -> Problems:
    if is_sequence(data):
        return _first_failing_element(data, pattern, root, path)

    if data is None:
        return [make_problem(
            "data is undefined, should match pattern",
            data, pattern, path,
            kind=ProblemKind.STRUCTURAL_MISMATCH,
        )]

    text = _regex_subject(data, pattern)
    if text is None:
        return [make_problem(
            "data type cannot be matched by pattern",
            data, pattern, path,
            kind=ProblemKind.VALUE_MISMATCH,
        )]
    if not pattern.search(text):
        return [make_problem("data does not match pattern", data, pattern, path, kind=ProblemKind.VALUE_MISMATCH)]
    return []


def _match_predicate(data: Any, pattern: Any, root: Any, path: str) -> Problems:
    try:
        result = _call_predicate(pattern, data, root, path)
        if isinstance(result, Iterable) and not isinstance(result, (str, bytes, bytearray, Mapping, Problem)):
            # Generators run here, so their errors are reported like any other
            result = list(result)
    except Exception as e:
        logger.error(
            "predicate_failed",
            predicate=getattr(pattern, "__name__", repr(pattern)),
            path=path,
            error=str(e),
            error_type=type(e).__name__,
        )
        # A broken predicate is reported like any other problem
        return [make_problem(
            f"predicate raised {type(e).__name__}: {e}",
            data, pattern, path,
            kind=ProblemKind.PREDICATE_ERROR,
        )]

    if not result:
        return []
    if isinstance(result, Problem):
        return [result]
    if isinstance(result, list) and all(isinstance(p, Problem) for p in result):
        return result

    # Plain truthy answers, e.g. a lambda returning True for "bad"
    return [make_problem("data does not satisfy predicate", data, pattern, path)]


def _match_sequence(data: Any, pattern: Any, root: Any, path: str) -> Problems:
    if not is_sequence(data):
        return [make_problem("data is not an array", data, pattern, path, kind=ProblemKind.STRUCTURAL_MISMATCH)]

    # Every element pattern against every element, not zipped
    problems: Problems = []
    for element_pattern in pattern:
        for index, element in enumerate(data):
            result = matches(element, element_pattern, root, f"{path}[{index}]")
            if result:
                problems.extend(result)
    return problems


def _match_struct(data: Any, pattern: Any, root: Any, path: str) -> Problems:
    if is_sequence(data):
        return _first_failing_element(data, pattern, root, path)

    if _is_query_params(data):
        data = _first_values(data)

    if isinstance(data, Mapping):
        lookup = data.get
    elif _is_object(data):
        lookup = _attribute_lookup(data)
    else:
        return [make_problem(
            "data is not an object, pattern is",
            data, pattern, path,
            kind=ProblemKind.STRUCTURAL_MISMATCH,
        )]

    # Keys only in data are ignored, keys only in the pattern are matched as None
    problems: Problems = []
    for key, value_pattern in pattern.items():
        result = matches(lookup(key), value_pattern, root, f"{path}.{key}")
        if result:
            problems.extend(result)
    return problems


def _match_exact(data: Any, pattern: Any, root: Any, path: str) -> Problems:
    if not _strictly_equal(data, pattern):
        return [make_problem("data and pattern are not equal", data, pattern, path, kind=ProblemKind.VALUE_MISMATCH)]
    return []


_MATCHERS: dict[PatternKind, Callable[[Any, Any, Any, str], Problems]] = {
    PatternKind.UNDEFINED: _match_undefined,
    PatternKind.TYPE_TAG: _match_type_tag,
    PatternKind.REGEX: _match_regex,
    PatternKind.PREDICATE: _match_predicate,
    PatternKind.SEQUENCE: _match_sequence,
    PatternKind.STRUCT: _match_struct,
    PatternKind.EXACT: _match_exact,
}


# ── Helpers ──


def _first_failing_element(data: Any, pattern: Any, root: Any, path: str) -> Problems:
    """Report only the first element of data that fails a non-sequence pattern."""
    for index, element in enumerate(data):
        element_path = f"{path}[{index}]"
        result = matches(element, pattern, root, element_path)
        if result:
            return [make_problem(
                f"data[{index}] does not match pattern",
                element, pattern, element_path,
                kind=result[0].kind,
            )]
    return []


def _regex_subject(data: Any, pattern: Any) -> Any:
    """The value to search, or None when data cannot meet the regex's str/bytes type."""
    binary = isinstance(data, (bytes, bytearray))
    if isinstance(pattern.pattern, bytes):
        return data if binary else None
    if binary:
        return None
    return data if isinstance(data, str) else str(data)


def _call_predicate(predicate: Callable, data: Any, root: Any, path: str) -> Any:
    """Call predicate with as many of (data, root, path) as it accepts."""
    args = (data, root, path)
    return predicate(*args[:_positional_arity(predicate)])


def _positional_arity(func: Callable) -> int:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures get everything
        return 3

    count = 0
    for parameter in signature.parameters.values():
        if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
            return 3
        if parameter.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            count += 1
    return min(count, 3)


def _is_query_params(data: Any) -> bool:
    """Multi-value query mappings: starlette QueryParams, werkzeug MultiDict, multidict."""
    if not hasattr(data, "keys"):
        return False
    return callable(getattr(data, "getlist", None)) or callable(getattr(data, "getall", None))


def _first_values(params: Any) -> dict:
    """Plain dict holding the first value given for each query key."""
    get_all = getattr(params, "getlist", None) or params.getall
    return {key: get_all(key)[0] for key in params.keys()}


def _is_object(data: Any) -> bool:
    if data is None or isinstance(data, _SCALARS):
        return False
    return hasattr(data, "__dict__") or hasattr(data, "__slots__")


def _attribute_lookup(data: Any) -> Callable[[Any], Any]:
    def lookup(key: Any) -> Any:
        if not isinstance(key, str):
            return None
        return getattr(data, key, None)
    return lookup


def _strictly_equal(data: Any, pattern: Any) -> bool:
    """Value equality where booleans never equal numbers (True != 1).

    A value always equals itself, NaN included.
    """
    if data is pattern:
        return True
    if isinstance(data, bool) != isinstance(pattern, bool):
        return False
    return data == pattern
