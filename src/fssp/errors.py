"""
Exceptions raised while loading rule specifications and stepping the line.
"""

from typing import Optional


class SpecificationError(ValueError):
    """
    Base class for problems found while loading a rule specification.

    Attributes:
        line: 1-based line number in the specification text, if known
    """

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class TruncatedSpecification(SpecificationError):
    """A section declares more lines than the text provides."""


class MalformedStateLine(SpecificationError):
    """A state definition does not split into name, fg, bg and role."""


class MalformedRuleLine(SpecificationError):
    """A rule does not split into left, center, right and next."""


class UnknownStateReference(SpecificationError):
    """A rule names a state that was never declared."""


class EncodingOverflow(SpecificationError):
    """A state index does not fit the packed key."""


class DuplicateState(SpecificationError):
    """Two state definitions share a name."""


class MissingRole(SpecificationError):
    """A required role is absent or declared more than once."""


class ConflictingRule(SpecificationError):
    """The same neighbourhood is mapped to two different next states."""


class UndefinedTransition(LookupError):
    """
    The rule table has no entry for a neighbourhood met during a step.

    Attributes:
        position: Interior position (1..N) whose update failed
        triple: (left, center, right) state names
    """

    def __init__(self, position: int, triple: tuple[str, str, str]):
        self.position = position
        self.triple = triple
        left, center, right = triple
        super().__init__(
            f"no rule for {left}##{center}##{right} at cell {position}"
        )
