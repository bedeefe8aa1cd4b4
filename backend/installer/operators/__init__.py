"""Operator plugin contract, models, errors, registry and validation engine."""

from .base import OperatorPlugin
from .errors import (
    ConfigurationError,
    CyclicDependencyError,
    DuplicateOperatorError,
    DuplicateValidationIdError,
    InfrastructureError,
    MissingDependencyError,
    OperatorError,
    OperatorNotFoundError,
    SelfDependencyError,
)
from .models import (
    Cluster,
    FeatureSupportLevelID,
    HighAvailabilityMode,
    Host,
    HostRequirements,
    HostRole,
    HostTypeRequirements,
    Inventory,
    MonitoredOperator,
    OperatorHardwareRequirements,
    OperatorHostRequirements,
    OperatorProperty,
    OperatorType,
    PropertyDataType,
    ValidationResult,
    ValidationStatus,
)
from .registry import OperatorRegistry
from .aggregator import (
    AggregatedRequirements,
    HostRequirementsBreakdown,
    OperatorRequirementError,
    RequirementAggregator,
)
from .orchestrator import ValidationOrchestrator, ValidationOutcome, ValidationReport
from .bootstrap import build_default_registry, build_services, initialize

__all__ = [
    "OperatorPlugin",
    "OperatorError",
    "ConfigurationError",
    "DuplicateOperatorError",
    "OperatorNotFoundError",
    "SelfDependencyError",
    "MissingDependencyError",
    "CyclicDependencyError",
    "DuplicateValidationIdError",
    "InfrastructureError",
    "Cluster",
    "Host",
    "Inventory",
    "HostRole",
    "HighAvailabilityMode",
    "OperatorType",
    "FeatureSupportLevelID",
    "MonitoredOperator",
    "OperatorProperty",
    "PropertyDataType",
    "HostRequirements",
    "HostTypeRequirements",
    "OperatorHardwareRequirements",
    "OperatorHostRequirements",
    "ValidationResult",
    "ValidationStatus",
    "OperatorRegistry",
    "RequirementAggregator",
    "AggregatedRequirements",
    "HostRequirementsBreakdown",
    "OperatorRequirementError",
    "ValidationOrchestrator",
    "ValidationOutcome",
    "ValidationReport",
    "build_default_registry",
    "build_services",
    "initialize",
]
