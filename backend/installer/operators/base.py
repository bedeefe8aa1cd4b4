"""Base contract for operator plugins.

All operator plugins must implement this interface. A plugin is constructed
once at startup and is read-only afterwards: anything that varies per call
arrives through method arguments.

Contract:
1) ``get_dependencies`` names the operators that must be installed first.
2) ``validate_cluster`` / ``validate_host`` return a ``ValidationResult``
   whose ``validation_id`` is always set. A validation failure is returned as
   data; raising signals an infrastructure failure.
3) ``get_preflight_requirements`` embeds the plugin's own dependencies.
4) Metadata accessors are side-effect free and safe to cache.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .models import (
    Cluster,
    FeatureSupportLevelID,
    Host,
    HostRequirements,
    HostTypeRequirements,
    MonitoredOperator,
    OperatorHardwareRequirements,
    OperatorProperty,
    ValidationResult,
)


class OperatorPlugin(ABC):
    """Abstract operator plugin contract."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable unique operator name, used as dependency graph key."""

    @property
    @abstractmethod
    def full_name(self) -> str:
        """Human readable operator name."""

    @property
    @abstractmethod
    def cluster_validation_id(self) -> str:
        """Identifier of this operator's cluster-level validation."""

    @property
    @abstractmethod
    def host_validation_id(self) -> str:
        """Identifier of this operator's host-level validation."""

    @property
    @abstractmethod
    def feature_support_id(self) -> FeatureSupportLevelID:
        """Feature identifier used by the support-level matrix."""

    @abstractmethod
    def get_dependencies(self, cluster: Cluster | None) -> list[str]:
        """Names of operators that must be installed before this one."""

    @abstractmethod
    async def validate_cluster(self, cluster: Cluster) -> ValidationResult:
        """Check whether the cluster satisfies the operator's requirements."""

    @abstractmethod
    async def validate_host(
        self,
        cluster: Cluster,
        host: Host,
        host_requirements: HostRequirements,
    ) -> ValidationResult:
        """Check whether a host satisfies the operator's requirements."""

    @abstractmethod
    async def get_preflight_requirements(self, cluster: Cluster) -> OperatorHardwareRequirements:
        """Hardware requirements that can be determined from cluster data only."""

    @abstractmethod
    def get_monitored_operator(self) -> MonitoredOperator:
        """Describe how the operator is installed and monitored."""

    def get_properties(self) -> list[OperatorProperty]:
        """User-settable properties of the operator."""
        return []

    async def get_host_requirements(self, cluster: Cluster, host: Host) -> HostRequirements:
        """Requirements the host must satisfy to install the operator.

        Defaults to the worker requirements of the preflight lookup. Plugins
        whose needs depend on the host class override this and pick by role.
        """
        preflight = await self.get_preflight_requirements(cluster)
        return preflight.requirements.worker

    def build_preflight_requirements(
        self,
        cluster: Cluster | None,
        master: HostRequirements | None = None,
        worker: HostRequirements | None = None,
    ) -> OperatorHardwareRequirements:
        """Assemble a preflight result that embeds this operator's dependencies."""
        return OperatorHardwareRequirements(
            operator_name=self.name,
            dependencies=tuple(self.get_dependencies(cluster)),
            requirements=HostTypeRequirements(
                master=master or HostRequirements.zero(),
                worker=worker or HostRequirements.zero(),
            ),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"
