"""Problem models: violation kinds, the Problem record and the match report.

A Problem is plain data: same fields, same problem. Matching never raises
for a violation, it returns Problems.
"""

from enum import Enum
from typing import Any, Iterable, Literal, Optional, Union

from pydantic import BaseModel, Field


class ProblemKind(str, Enum):
    """What kind of mismatch a Problem describes."""

    TYPE_MISMATCH = "type_mismatch"                # Wrong runtime type for a type tag
    STRUCTURAL_MISMATCH = "structural_mismatch"    # Not a list/mapping, empty string, regex on missing data
    VALUE_MISMATCH = "value_mismatch"              # Exact value or regex did not match
    COMBINATOR_VIOLATION = "combinator_violation"  # one_of / any_of / all_of / not_ / instance_of
    PRESENCE_VIOLATION = "presence_violation"      # required() on missing data
    PREDICATE_VIOLATION = "predicate_violation"    # A predicate rejected the data
    PREDICATE_ERROR = "predicate_error"            # A predicate raised instead of answering


class Problem(BaseModel):
    """A single located mismatch between data and pattern."""

    message: str
    found: Any = None
    expected: Any = None
    path: str = ""  # Root-relative, e.g. ".client_info.scopes[2]"
    subproblems: Optional[list["Problem"]] = None  # Only all_of() fills this
    kind: ProblemKind = ProblemKind.PREDICATE_VIOLATION

    model_config = {"frozen": True, "arbitrary_types_allowed": True}


Problems = list[Problem]
MatchResult = Union[Literal[False], Problems]  # Never an empty list


def make_problem(
    message: str,
    found: Any,
    expected: Any,
    path: str,
    subproblems: Optional[Iterable[Problem]] = None,
    kind: ProblemKind = ProblemKind.PREDICATE_VIOLATION,
) -> Problem:
    """Build a Problem. Predicates written by callers use this too."""
    return Problem(
        message=message,
        found=found,
        expected=expected,
        path=path,
        subproblems=list(subproblems) if subproblems is not None else None,
        kind=kind,
    )


def as_result(problems: Problems) -> MatchResult:
    """Collapse an empty problem list to False."""
    if problems:
        return problems
    return False


class MatchReport(BaseModel):
    """Outcome of one check() run."""

    passed: bool
    problems: Problems = Field(default_factory=list)
    summary: dict[str, int] = Field(
        default_factory=dict,
        description="Count of top-level problems by kind",
    )

    model_config = {"arbitrary_types_allowed": True}

    @classmethod
    def build(cls, result: MatchResult) -> "MatchReport":
        """Build a report from a matches() result."""
        problems = list(result) if result else []

        summary = {kind.value: 0 for kind in ProblemKind}
        for problem in problems:
            summary[ProblemKind(problem.kind).value] += 1

        return cls(passed=not problems, problems=problems, summary=summary)
