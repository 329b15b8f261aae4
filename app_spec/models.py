"""
Pydantic models for application deployment configurations.
Defines the schema for the YAML/JSON app config format.

Every field defaults to None so that an incomplete configuration still
decodes; whether it is well-formed is decided by the rules attached to
each field (see app_spec.rules and app_spec.validator).

Decoded configurations are immutable: records are frozen, sequences are
tuples and mappings are read-only. Integer fields are strict so that
booleans, floats and numeric strings are decoding errors, while numbers
given for string fields (``cpu: 1``) are read as strings.
"""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any, Dict, List, Mapping, Optional, Tuple

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictInt, ValidationError

from .exceptions import ConfigDecodeError
from .rules import MinInt, Required, RequiredIf, RequiredWith, RequiredWithout

logger = logging.getLogger(__name__)

DEFAULT_STAGE_NAME = "production"
DEFAULT_BRANCH_NAME = "main"


class PolicyType(str, Enum):
    """Stage policy types."""
    BRANCH = "branch"


SUPPORTED_POLICY_TYPES = tuple(t.value for t in PolicyType)

ReadOnlyStrMapping = Annotated[Mapping[str, str], AfterValidator(MappingProxyType)]


class SpecModel(BaseModel):
    """Base for all configuration records. Records are immutable once decoded."""
    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)


# Build

class BuildConfig(SpecModel):
    """How to obtain a deployable image."""
    image: Annotated[Optional[str], RequiredWithout("dockerfile")] = Field(
        None, description="Use an existing image instead of building one"
    )
    dockerfile: Annotated[
        Optional[str],
        RequiredWithout("image"),
        RequiredWith("docker_context", "build_args"),
    ] = Field(None, description="Path to the Dockerfile")
    docker_context: Optional[str] = Field(None, description="Docker build context path")
    build_args: Optional[ReadOnlyStrMapping] = Field(None, description="Docker build arguments")

    @property
    def strategy(self) -> Optional[str]:
        """The build strategy this config resolves to, if any."""
        if self.image:
            return "image"
        if self.dockerfile:
            return "dockerfile"
        return None


# Releases

class ResourceConfig(SpecModel):
    """CPU/memory request. Values are opaque strings such as '500m' or '256Mi'."""
    cpu: Annotated[Optional[str], Required()] = Field(None, description="CPU request")
    memory: Annotated[Optional[str], Required()] = Field(None, description="Memory request")


class ReleaseActionConfig(SpecModel):
    """Command run at release time."""
    command: Annotated[Optional[Tuple[str, ...]], Required()] = Field(None, description="Release command")


class ReleaseConfig(SpecModel):
    """One release step."""
    name: Annotated[Optional[str], Required()] = Field(None, description="Release name")
    resources: Annotated[Optional[ResourceConfig], Required()] = Field(None, description="Release resources")
    action: Annotated[Optional[ReleaseActionConfig], Required()] = Field(None, description="Release action")


# Service

class ServiceHTTPConfig(SpecModel):
    """One exposed HTTP port."""
    target_port: Annotated[Optional[StrictInt], Required(), MinInt(1)] = Field(
        None, description="Port the service listens on"
    )
    force_https: bool = Field(False, description="Redirect HTTP requests to HTTPS")


class HealthcheckHTTPConfig(SpecModel):
    """HTTP health probe."""
    path: Annotated[Optional[str], Required()] = Field(None, description="Health check endpoint path")


class HealthcheckProcessConfig(SpecModel):
    """Process health probe."""
    command: Annotated[Optional[Tuple[str, ...]], Required()] = Field(None, description="Health check command")


class HealthcheckConfig(SpecModel):
    """How liveness is probed. At least one of http or process must be set."""
    http: Annotated[Optional[HealthcheckHTTPConfig], RequiredWithout("process")] = Field(
        None, description="HTTP health check"
    )
    process: Annotated[Optional[HealthcheckProcessConfig], RequiredWithout("http")] = Field(
        None, description="Process health check"
    )


class ServiceMetricConfig(SpecModel):
    """Metric that triggers scaling."""
    type: Annotated[Optional[str], Required()] = Field(None, description="Metric type (e.g. 'cpu')")
    threshold: Annotated[Optional[StrictInt], Required(), MinInt(1)] = Field(
        None, description="Scaling threshold"
    )


class ServiceScaleConfig(SpecModel):
    """Autoscaling bounds."""
    min: Annotated[Optional[StrictInt], Required(), MinInt(0)] = Field(None, description="Minimum instances")
    max: Annotated[Optional[StrictInt], Required(), MinInt(1)] = Field(None, description="Maximum instances")
    metric: Annotated[Optional[ServiceMetricConfig], Required()] = Field(None, description="Scaling metric")


class MachineConfig(SpecModel):
    """Machine sizing override."""
    cpu: Annotated[Optional[str], Required()] = Field(None, description="Machine CPU")
    memory: Annotated[Optional[str], Required()] = Field(None, description="Machine memory")
    flavor: Optional[str] = Field(None, description="Machine flavor")


class ServiceConfig(SpecModel):
    """The long-running service."""
    name: Annotated[Optional[str], Required()] = Field(None, description="Service name")
    command: Annotated[Optional[Tuple[str, ...]], Required()] = Field(None, description="Service start command")
    http: Optional[Tuple[ServiceHTTPConfig, ...]] = Field(None, description="Exposed HTTP ports")
    healthcheck: Optional[HealthcheckConfig] = Field(None, description="Health check config")
    scale: Optional[ServiceScaleConfig] = Field(None, description="Scaling policy")
    machine_config: Optional[MachineConfig] = Field(None, description="Machine override")


# Stages

class BranchConfig(SpecModel):
    """Branch trigger detail."""
    name: Annotated[Optional[str], Required()] = Field(None, description="Target branch name")


class StagePolicyConfig(SpecModel):
    """How a stage is triggered."""
    type: Annotated[Optional[str], Required()] = Field(None, description="Policy type (currently only 'branch')")
    branch: Annotated[Optional[BranchConfig], RequiredIf("type", PolicyType.BRANCH.value)] = Field(
        None, description="Branch policy, required when type is 'branch'"
    )


class StageConfig(SpecModel):
    """A deployment stage."""
    name: Annotated[Optional[str], Required()] = Field(None, description="Stage name")
    policy: Annotated[Optional[StagePolicyConfig], Required()] = Field(None, description="Stage policy")


def default_stage() -> StageConfig:
    """The stage implied when an app declares none."""
    return StageConfig(
        name=DEFAULT_STAGE_NAME,
        policy=StagePolicyConfig(
            type=PolicyType.BRANCH.value,
            branch=BranchConfig(name=DEFAULT_BRANCH_NAME),
        ),
    )


# Root

class AppConfig(SpecModel):
    """Complete application configuration."""
    app_name: Annotated[Optional[str], Required()] = Field(None, description="Application name")
    build: Annotated[Optional[BuildConfig], Required()] = Field(None, description="Build config")
    releases: Annotated[Optional[Tuple[ReleaseConfig, ...]], Required()] = Field(None, description="Release steps")
    service: Annotated[Optional[ServiceConfig], Required()] = Field(None, description="Service config")

    # Optional configurations
    stages: Optional[Tuple[StageConfig, ...]] = Field(
        None, description="Deployment stages; a 'production' stage is used when omitted"
    )

    def resolved_stages(self) -> List[StageConfig]:
        """Declared stages, or the default production stage when none are declared."""
        if self.stages:
            return list(self.stages)
        return [default_stage()]


# Decoding helpers

def load_app_config(data: Dict[str, Any]) -> AppConfig:
    """
    Decode a configuration dictionary into an AppConfig.

    Decoding only checks value types; it does not enforce the schema rules.
    Use app_spec.validator.validate_config on the result for that.

    Args:
        data: Dictionary containing the app configuration

    Returns:
        Decoded AppConfig object

    Raises:
        ConfigDecodeError: If a value has the wrong type for its field
    """
    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        logger.debug(f"Failed to decode app config: {e}")
        raise ConfigDecodeError(e.errors()) from e


def get_default_config(app_name: str, image: str) -> Dict[str, Any]:
    """
    Generate a default application configuration.

    Args:
        app_name: Name of the application
        image: Existing image to deploy

    Returns:
        Default configuration dictionary
    """
    return {
        "app_name": app_name,
        "build": {
            "image": image,
        },
        "releases": [
            {
                "name": "release",
                "resources": {"cpu": "500m", "memory": "256Mi"},
                "action": {"command": ["echo", "release"]},
            }
        ],
        "service": {
            "name": "web",
            "command": ["./start"],
            "http": [{"target_port": 8080}],
        },
    }


def get_example_configs() -> Dict[str, Dict[str, Any]]:
    """Get example application configurations for different use cases."""

    return {
        "minimal": {
            "app_name": "myapp",
            "build": {"image": "myapp:latest"},
            "releases": [
                {
                    "name": "release-v1",
                    "resources": {"cpu": "500m", "memory": "256Mi"},
                    "action": {"command": ["echo", "deploy"]},
                }
            ],
            "service": {
                "name": "web",
                "command": ["npm", "start"],
            },
        },

        "node-web": {
            "app_name": "node-web",
            "build": {
                "dockerfile": "Dockerfile",
                "docker_context": ".",
                "build_args": {"NODE_ENV": "production"},
            },
            "releases": [
                {
                    "name": "migrate",
                    "resources": {"cpu": "250m", "memory": "128Mi"},
                    "action": {"command": ["npm", "run", "migrate"]},
                }
            ],
            "service": {
                "name": "web",
                "command": ["npm", "start"],
                "http": [{"target_port": 3000, "force_https": True}],
                "healthcheck": {"http": {"path": "/healthz"}},
                "scale": {
                    "min": 1,
                    "max": 5,
                    "metric": {"type": "cpu", "threshold": 70},
                },
            },
            "stages": [
                {"name": "staging", "policy": {"type": "branch", "branch": {"name": "develop"}}},
                {"name": "production", "policy": {"type": "branch", "branch": {"name": "main"}}},
            ],
        },

        "python-worker": {
            "app_name": "ml-worker",
            "build": {"image": "python:3.12-slim"},
            "releases": [
                {
                    "name": "warmup",
                    "resources": {"cpu": "1", "memory": "1Gi"},
                    "action": {"command": ["python", "-m", "worker.warmup"]},
                }
            ],
            "service": {
                "name": "worker",
                "command": ["python", "-m", "worker"],
                "healthcheck": {"process": {"command": ["pgrep", "-f", "worker"]}},
                "scale": {
                    "min": 0,
                    "max": 3,
                    "metric": {"type": "queue_depth", "threshold": 100},
                },
                "machine_config": {"cpu": "2", "memory": "4Gi", "flavor": "highmem"},
            },
        },
    }
