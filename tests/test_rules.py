"""Individual rule semantics and the rule metadata declared on the schema."""
from types import MappingProxyType

import pytest

from app_spec import BuildConfig, HealthcheckConfig, ServiceScaleConfig, StagePolicyConfig
from app_spec.rules import (
    MinInt,
    Required,
    RequiredIf,
    RequiredWith,
    RequiredWithout,
    ViolationKind,
    field_rules,
    has_value,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, False),
        ("", False),
        ([], False),
        ({}, False),
        ((), False),
        (MappingProxyType({}), False),
        (("x",), True),
        (MappingProxyType({"k": "v"}), True),
        ("x", True),
        (["x"], True),
        ({"k": "v"}, True),
        (0, True),
        (False, True),
    ],
)
def test_has_value(value, expected):
    assert has_value(value) is expected


@pytest.mark.parametrize(
    "rule, tag",
    [
        (Required(), "required"),
        (MinInt(1), "min=1"),
        (RequiredWithout("process"), "required_without=process"),
        (RequiredWith("docker_context", "build_args"), "required_with=docker_context build_args"),
        (RequiredIf("type", "branch"), "required_if=type branch"),
    ],
)
def test_rule_tags(rule, tag):
    assert rule.tag() == tag
    assert str(rule) == tag


def test_required():
    owner = StagePolicyConfig()
    assert Required().check("x", owner) is None
    assert Required().check(None, owner).kind == ViolationKind.MISSING_REQUIRED_FIELD
    assert Required().check("", owner).kind == ViolationKind.MISSING_REQUIRED_FIELD
    assert Required().check([], owner).kind == ViolationKind.STRUCTURAL_MISMATCH
    assert Required().check((), owner).kind == ViolationKind.STRUCTURAL_MISMATCH


def test_min_int_ignores_absent_values():
    owner = ServiceScaleConfig()
    assert MinInt(1).check(None, owner) is None
    assert MinInt(0).check(0, owner) is None
    failure = MinInt(0).check(-3, owner)
    assert failure.kind == ViolationKind.BOUND_VIOLATION
    assert failure.value == -3


def test_required_without_reads_sibling():
    rule = RequiredWithout("process")
    assert rule.check(None, HealthcheckConfig(process={"command": ["true"]})) is None
    failure = rule.check(None, HealthcheckConfig())
    assert failure.kind == ViolationKind.CONDITIONAL_REQUIREMENT_UNMET


def test_required_with_names_present_siblings():
    rule = RequiredWith("docker_context", "build_args")
    assert rule.check(None, BuildConfig(image="app:1")) is None
    failure = rule.check(None, BuildConfig(docker_context=".", build_args={"A": "1"}))
    assert failure.message == "is required when docker_context, build_args is set"


def test_required_if_only_applies_on_match():
    rule = RequiredIf("type", "branch")
    assert rule.check(None, StagePolicyConfig(type="manual")) is None
    assert rule.check(None, StagePolicyConfig(type="branch")) is not None


def test_schema_declares_rules_in_order():
    fields = ServiceScaleConfig.model_fields
    assert field_rules(fields["min"]) == [Required(), MinInt(0)]
    assert field_rules(fields["max"]) == [Required(), MinInt(1)]
    assert field_rules(BuildConfig.model_fields["dockerfile"]) == [
        RequiredWithout("image"),
        RequiredWith("docker_context", "build_args"),
    ]
    assert field_rules(BuildConfig.model_fields["docker_context"]) == []
