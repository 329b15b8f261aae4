"""
Rule-driven validation of application configurations.

The validator walks a decoded configuration depth-first, evaluates the rules
declared on every field and collects every violation into one report. It
never stops at the first failure and never raises for an invalid tree.
"""

import logging
from typing import Any, Dict, List

from pydantic import BaseModel

from .models import AppConfig, SUPPORTED_POLICY_TYPES, StagePolicyConfig, load_app_config
from .report import ValidationReport, Violation
from .rules import field_rules

logger = logging.getLogger(__name__)


def validate_config(config: BaseModel) -> ValidationReport:
    """
    Validate a configuration record and everything below it.

    Args:
        config: An AppConfig, or any nested configuration record

    Returns:
        ValidationReport listing every violation in visiting order
    """
    violations: List[Violation] = []
    _walk(config, "", violations)
    report = ValidationReport(tuple(violations))

    if report.ok:
        logger.debug(f"{type(config).__name__} is valid")
    else:
        logger.debug(f"{type(config).__name__} has {len(report)} violation(s)")
    return report


def _walk(record: BaseModel, prefix: str, violations: List[Violation]):
    """Check each field of a record in declaration order, then descend into it."""
    for name, field in type(record).model_fields.items():
        value = getattr(record, name)
        path = f"{prefix}.{name}" if prefix else name

        for rule in field_rules(field):
            failure = rule.check(value, record)
            if failure is not None:
                violations.append(Violation(
                    path=path,
                    kind=failure.kind,
                    rule=rule.tag(),
                    message=failure.message,
                    value=failure.value,
                ))
                break

        _descend(value, path, violations)

    if isinstance(record, StagePolicyConfig):
        _warn_unsupported_policy(record, f"{prefix}.type" if prefix else "type")


def _descend(value: Any, path: str, violations: List[Violation]):
    if isinstance(value, BaseModel):
        _walk(value, path, violations)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _descend(item, f"{path}[{index}]", violations)


def _warn_unsupported_policy(policy: StagePolicyConfig, type_path: str):
    # Unknown policy types pass validation, only warn.
    if policy.type and policy.type not in SUPPORTED_POLICY_TYPES:
        logger.warning(
            f"{type_path}: policy type '{policy.type}' is not supported "
            f"(supported: {', '.join(SUPPORTED_POLICY_TYPES)})"
        )


def check_app_config(data: Dict[str, Any]) -> AppConfig:
    """
    Decode and validate an application configuration.

    Args:
        data: Dictionary containing the app configuration

    Returns:
        Validated AppConfig object

    Raises:
        ConfigDecodeError: If a value has the wrong type for its field
        InvalidAppConfigError: If the configuration violates any rule
    """
    config = load_app_config(data)
    validate_config(config).raise_for_violations()
    return config
