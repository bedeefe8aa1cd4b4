"""Models for operator plugin inputs, metadata and results.

Inbound snapshots and static operator metadata are pydantic models so the
installer can build them straight from API payloads. Everything a plugin
produces is a frozen dataclass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Enums
# ============================================================================

class HostRole(str, Enum):
    """Role a host plays in the cluster."""
    MASTER = "master"
    WORKER = "worker"
    AUTO_ASSIGN = "auto-assign"


class HighAvailabilityMode(str, Enum):
    """Control plane topology; ``NONE`` is a single-node cluster."""
    FULL = "Full"
    NONE = "None"


class OperatorType(str, Enum):
    """How an operator gets installed."""
    OLM = "olm"
    BUILTIN = "builtin"


class FeatureSupportLevelID(str, Enum):
    """Feature identifiers used by the support-level matrix."""
    NODE_FEATURE_DISCOVERY = "NODE-FEATURE-DISCOVERY"
    NVIDIA_GPU = "NVIDIA-GPU"
    LVM = "LVM"
    CNV = "CNV"


class ValidationStatus(str, Enum):
    """Outcome of a single operator validation."""
    SUCCESS = "success"
    FAILURE = "failure"
    PENDING = "pending"


class PropertyDataType(str, Enum):
    """Data types an operator property can hold."""
    BOOLEAN = "boolean"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"


# ============================================================================
# Inbound snapshots
# ============================================================================

class Cpu(BaseModel):
    model_config = ConfigDict(frozen=True)

    count: int = 0
    architecture: str = "x86_64"
    flags: list[str] = Field(default_factory=list)


class Memory(BaseModel):
    model_config = ConfigDict(frozen=True)

    physical_bytes: int = 0


class Disk(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    size_bytes: int = 0
    drive_type: str = "HDD"
    bootable: bool = False


class Gpu(BaseModel):
    model_config = ConfigDict(frozen=True)

    vendor: str = ""
    vendor_id: str = ""
    name: str = ""


class Inventory(BaseModel):
    """Hardware reported by the discovery agent running on a host."""

    model_config = ConfigDict(frozen=True)

    cpu: Cpu = Field(default_factory=Cpu)
    memory: Memory = Field(default_factory=Memory)
    disks: list[Disk] = Field(default_factory=list)
    gpus: list[Gpu] = Field(default_factory=list)


class Host(BaseModel):
    """Read-only snapshot of a host as seen by the installer."""

    model_config = ConfigDict(frozen=True)

    id: str
    requested_hostname: str = ""
    role: HostRole = HostRole.AUTO_ASSIGN
    suggested_role: HostRole | None = None
    installation_disk_id: str | None = None
    inventory: Inventory = Field(default_factory=Inventory)

    @property
    def effective_role(self) -> HostRole:
        """Role used for requirement lookups; auto-assign hosts use the suggestion."""
        if self.role != HostRole.AUTO_ASSIGN:
            return self.role
        if self.suggested_role is not None and self.suggested_role != HostRole.AUTO_ASSIGN:
            return self.suggested_role
        return HostRole.WORKER


class Cluster(BaseModel):
    """Read-only snapshot of a cluster as seen by the installer."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    openshift_version: str = ""
    high_availability_mode: HighAvailabilityMode = HighAvailabilityMode.FULL
    operators: list[str] = Field(
        default_factory=list,
        description="Names of the operators requested for installation",
    )
    hosts: list[Host] = Field(default_factory=list)

    @property
    def is_single_node(self) -> bool:
        return self.high_availability_mode == HighAvailabilityMode.NONE


# ============================================================================
# Static operator metadata
# ============================================================================

class MonitoredOperator(BaseModel):
    """Immutable identity record describing how to install and monitor an operator."""

    model_config = ConfigDict(frozen=True)

    name: str
    display_name: str = ""
    namespace: str = ""
    operator_type: OperatorType = OperatorType.OLM
    subscription_name: str = ""
    timeout_seconds: int = Field(default=60 * 60, ge=0)


class OperatorProperty(BaseModel):
    """Description of a user-settable operator property."""

    model_config = ConfigDict(frozen=True)

    name: str
    data_type: PropertyDataType = PropertyDataType.STRING
    mandatory: bool = False
    description: str = ""
    default_value: str | None = None


# ============================================================================
# Hardware requirements
# ============================================================================

@dataclass(frozen=True, slots=True)
class HostRequirements:
    """Quantitative resources a host must provide.

    CPU, RAM and disk add up across operators. The installation disk speed
    threshold is a constraint rather than an amount: 0 means "no constraint"
    and merging keeps the strictest (lowest) non-zero value.
    """

    cpu_cores: int = 0
    ram_mib: int = 0
    disk_size_gb: int = 0
    installation_disk_speed_threshold_ms: int = 0

    @classmethod
    def zero(cls) -> HostRequirements:
        return cls()

    def __add__(self, other: HostRequirements) -> HostRequirements:
        if not isinstance(other, HostRequirements):
            return NotImplemented
        thresholds = [
            value
            for value in (self.installation_disk_speed_threshold_ms, other.installation_disk_speed_threshold_ms)
            if value > 0
        ]
        return HostRequirements(
            cpu_cores=self.cpu_cores + other.cpu_cores,
            ram_mib=self.ram_mib + other.ram_mib,
            disk_size_gb=self.disk_size_gb + other.disk_size_gb,
            installation_disk_speed_threshold_ms=min(thresholds) if thresholds else 0,
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "cpu_cores": self.cpu_cores,
            "ram_mib": self.ram_mib,
            "disk_size_gb": self.disk_size_gb,
            "installation_disk_speed_threshold_ms": self.installation_disk_speed_threshold_ms,
        }


@dataclass(frozen=True, slots=True)
class HostTypeRequirements:
    """Requirements split by host class."""

    master: HostRequirements = field(default_factory=HostRequirements)
    worker: HostRequirements = field(default_factory=HostRequirements)

    def for_role(self, role: HostRole) -> HostRequirements:
        """Pick the requirements matching a host role (auto-assign counts as worker)."""
        return self.master if role == HostRole.MASTER else self.worker

    def __add__(self, other: HostTypeRequirements) -> HostTypeRequirements:
        if not isinstance(other, HostTypeRequirements):
            return NotImplemented
        return HostTypeRequirements(master=self.master + other.master, worker=self.worker + other.worker)

    def to_dict(self) -> dict[str, Any]:
        return {
            "master": {"quantitative": self.master.to_dict()},
            "worker": {"quantitative": self.worker.to_dict()},
        }


@dataclass(frozen=True, slots=True)
class OperatorHardwareRequirements:
    """Preflight requirements of one operator, including its dependencies."""

    operator_name: str
    dependencies: tuple[str, ...] = ()
    requirements: HostTypeRequirements = field(default_factory=HostTypeRequirements)

    def to_dict(self) -> dict[str, Any]:
        return {
            "operator_name": self.operator_name,
            "dependencies": list(self.dependencies),
            "requirements": self.requirements.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class OperatorHostRequirements:
    """Requirements one operator places on one particular host."""

    operator_name: str
    requirements: HostRequirements

    def to_dict(self) -> dict[str, Any]:
        return {"operator_name": self.operator_name, "requirements": self.requirements.to_dict()}


# ============================================================================
# Validation results
# ============================================================================

@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of one cluster- or host-level operator validation."""

    validation_id: str
    status: ValidationStatus
    reasons: tuple[str, ...] = ()

    @classmethod
    def success(cls, validation_id: str) -> ValidationResult:
        return cls(validation_id=validation_id, status=ValidationStatus.SUCCESS)

    @classmethod
    def failure(cls, validation_id: str, *reasons: str) -> ValidationResult:
        return cls(validation_id=validation_id, status=ValidationStatus.FAILURE, reasons=tuple(reasons))

    @classmethod
    def pending(cls, validation_id: str, *reasons: str) -> ValidationResult:
        return cls(validation_id=validation_id, status=ValidationStatus.PENDING, reasons=tuple(reasons))

    @property
    def ok(self) -> bool:
        return self.status == ValidationStatus.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        """Serialize this result to a JSON-safe dictionary."""
        return {
            "validation_id": self.validation_id,
            "status": self.status.value,
            "reasons": list(self.reasons),
        }
