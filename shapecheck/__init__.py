"""shapecheck: structural validation of runtime data against composable patterns.

Usage:
    from shapecheck import matches, required, optional, valid_url

    problems = matches(client, {
        "client_id": required(str),
        "redirect_uris": required([valid_url]),
        "logo_uri": optional(valid_url),
    })
    if problems:
        for problem in problems:
            print(problem.path, problem.message)
"""

from shapecheck.config import Settings, get_settings
from shapecheck.logs import configure_logging
from shapecheck.matching import (
    Boolean,
    MatchReport,
    MatchResult,
    Number,
    PatternKind,
    Problem,
    ProblemKind,
    String,
    all_of,
    any_of,
    check,
    classify,
    instance_of,
    make_problem,
    matches,
    not_,
    one_of,
    optional,
    recommended,
    required,
    valid_email,
    valid_url,
)
from shapecheck.assertions import (
    PatternAssertionError,
    ValidationContext,
    assert_matches,
    default_context,
    disable,
    enable,
    is_enabled,
)

__all__ = [
    "matches",
    "check",
    "Problem",
    "ProblemKind",
    "MatchReport",
    "MatchResult",
    "make_problem",
    "PatternKind",
    "classify",
    "Boolean",
    "Number",
    "String",
    "optional",
    "required",
    "recommended",
    "one_of",
    "any_of",
    "all_of",
    "not_",
    "instance_of",
    "valid_url",
    "valid_email",
    "ValidationContext",
    "default_context",
    "enable",
    "disable",
    "is_enabled",
    "assert_matches",
    "PatternAssertionError",
    "Settings",
    "get_settings",
    "configure_logging",
]
