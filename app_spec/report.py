"""
Validation verdicts for application configurations.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import InvalidAppConfigError
from .rules import ViolationKind


@dataclass(frozen=True)
class Violation:
    """A single violated rule, attributed to its structural path."""
    path: str
    kind: ViolationKind
    rule: str
    message: str
    value: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "path": self.path,
            "kind": self.kind.value,
            "rule": self.rule,
            "message": self.message,
        }
        if self.value is not None:
            data["value"] = self.value
        return data

    def __str__(self) -> str:
        return f"{self.path}: {self.message} [{self.rule}]"


@dataclass(frozen=True)
class ValidationReport:
    """
    Outcome of one validation run.

    An empty report means the configuration is valid. Violations keep the
    order in which the validator visited the tree.
    """
    violations: Tuple[Violation, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.violations

    def __len__(self) -> int:
        return len(self.violations)

    def __iter__(self):
        return iter(self.violations)

    def paths(self) -> List[str]:
        return [v.path for v in self.violations]

    def by_kind(self, kind: ViolationKind) -> List[Violation]:
        return [v for v in self.violations if v.kind == kind]

    def lines(self) -> List[str]:
        """One display line per violation."""
        return [str(v) for v in self.violations]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.ok,
            "violations": [v.to_dict() for v in self.violations],
        }

    def raise_for_violations(self):
        """Raise InvalidAppConfigError if the report holds any violation."""
        if not self.ok:
            raise InvalidAppConfigError(self)
