"""Pattern matching: the engine, the combinators and the problem model.

Usage:
    from shapecheck.matching import matches, required, one_of

    problems = matches(config, {"mode": one_of("file", "cloud"), "name": required(str)})
"""

from shapecheck.matching.models import MatchReport, MatchResult, Problem, ProblemKind, make_problem
from shapecheck.matching.patterns import Boolean, Number, PatternKind, String, classify
from shapecheck.matching.engine import check, matches
from shapecheck.matching.combinators import (
    all_of,
    any_of,
    instance_of,
    not_,
    one_of,
    optional,
    recommended,
    required,
)
from shapecheck.matching.predicates import valid_email, valid_url

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
]
