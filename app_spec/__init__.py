"""
Application configuration schema and validator.
"""

from .models import (
    AppConfig, BuildConfig, ReleaseConfig, ResourceConfig, ReleaseActionConfig,
    ServiceConfig, ServiceHTTPConfig, HealthcheckConfig, HealthcheckHTTPConfig,
    HealthcheckProcessConfig, ServiceScaleConfig, ServiceMetricConfig,
    MachineConfig, StageConfig, StagePolicyConfig, BranchConfig, PolicyType,
    SUPPORTED_POLICY_TYPES, default_stage, load_app_config,
    get_default_config, get_example_configs
)
from .rules import ViolationKind
from .report import ValidationReport, Violation
from .validator import validate_config, check_app_config
from .exceptions import AppSpecError, ConfigDecodeError, InvalidAppConfigError, ConfigFileError

__all__ = [
    'AppConfig', 'BuildConfig', 'ReleaseConfig', 'ResourceConfig', 'ReleaseActionConfig',
    'ServiceConfig', 'ServiceHTTPConfig', 'HealthcheckConfig', 'HealthcheckHTTPConfig',
    'HealthcheckProcessConfig', 'ServiceScaleConfig', 'ServiceMetricConfig',
    'MachineConfig', 'StageConfig', 'StagePolicyConfig', 'BranchConfig', 'PolicyType',
    'SUPPORTED_POLICY_TYPES', 'default_stage', 'load_app_config',
    'get_default_config', 'get_example_configs',
    'ViolationKind', 'ValidationReport', 'Violation',
    'validate_config', 'check_app_config',
    'AppSpecError', 'ConfigDecodeError', 'InvalidAppConfigError', 'ConfigFileError'
]
