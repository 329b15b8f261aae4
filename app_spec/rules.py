"""
Declarative field rules for application configuration schemas.

Rules are attached to model fields as ``typing.Annotated`` metadata and
evaluated by the validator against the record that owns the field.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, NamedTuple, Optional, Tuple

from pydantic import BaseModel
from pydantic.fields import FieldInfo


class ViolationKind(str, Enum):
    """Kinds of rule violations."""
    MISSING_REQUIRED_FIELD = "missing_required_field"
    BOUND_VIOLATION = "bound_violation"
    CONDITIONAL_REQUIREMENT_UNMET = "conditional_requirement_unmet"
    STRUCTURAL_MISMATCH = "structural_mismatch"


class RuleFailure(NamedTuple):
    kind: ViolationKind
    message: str
    value: Any = None


def has_value(value: Any) -> bool:
    """Return True if a field value counts as set."""
    if value is None:
        return False
    if isinstance(value, (Sequence, Mapping)):
        return len(value) > 0
    return True


class Rule:
    """Base class for field rules."""

    def check(self, value: Any, owner: BaseModel) -> Optional[RuleFailure]:
        raise NotImplementedError

    def tag(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return self.tag()


@dataclass(frozen=True)
class Required(Rule):
    """Field must be set. Sequences must also have at least one element."""

    def check(self, value, owner):
        if value is None or value == "":
            return RuleFailure(ViolationKind.MISSING_REQUIRED_FIELD, "is required")
        if isinstance(value, (Sequence, Mapping)) and not value:
            return RuleFailure(
                ViolationKind.STRUCTURAL_MISMATCH, "must contain at least one element"
            )
        return None

    def tag(self):
        return "required"


@dataclass(frozen=True)
class MinInt(Rule):
    """Integer field must be >= minimum when present."""
    minimum: int

    def check(self, value, owner):
        if value is None:
            return None
        if value < self.minimum:
            return RuleFailure(
                ViolationKind.BOUND_VIOLATION,
                f"must be >= {self.minimum} (got {value})",
                value,
            )
        return None

    def tag(self):
        return f"min={self.minimum}"


@dataclass(frozen=True)
class RequiredWithout(Rule):
    """Field is required when the named sibling is not set."""
    sibling: str

    def check(self, value, owner):
        if has_value(value) or has_value(getattr(owner, self.sibling)):
            return None
        return RuleFailure(
            ViolationKind.CONDITIONAL_REQUIREMENT_UNMET,
            f"is required when {self.sibling} is not set",
        )

    def tag(self):
        return f"required_without={self.sibling}"


@dataclass(frozen=True)
class RequiredWith(Rule):
    """Field is required when any of the named siblings is set."""
    siblings: Tuple[str, ...]

    def __init__(self, *siblings: str):
        object.__setattr__(self, "siblings", tuple(siblings))

    def check(self, value, owner):
        if has_value(value):
            return None
        present = [name for name in self.siblings if has_value(getattr(owner, name))]
        if not present:
            return None
        return RuleFailure(
            ViolationKind.CONDITIONAL_REQUIREMENT_UNMET,
            f"is required when {', '.join(present)} is set",
        )

    def tag(self):
        return f"required_with={' '.join(self.siblings)}"


@dataclass(frozen=True)
class RequiredIf(Rule):
    """Field is required when the named sibling equals a given value."""
    sibling: str
    expected: Any

    def check(self, value, owner):
        if has_value(value) or getattr(owner, self.sibling) != self.expected:
            return None
        return RuleFailure(
            ViolationKind.CONDITIONAL_REQUIREMENT_UNMET,
            f"is required when {self.sibling} is {self.expected!r}",
        )

    def tag(self):
        return f"required_if={self.sibling} {self.expected}"


def field_rules(field: FieldInfo) -> List[Rule]:
    """Return the rules declared on a model field, in declaration order."""
    return [item for item in field.metadata if isinstance(item, Rule)]
