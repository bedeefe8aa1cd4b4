"""Built-in Logical Volume Manager Storage operator plugin."""

from __future__ import annotations

import logging

from installer.operators.base import OperatorPlugin
from installer.operators.models import (
    Cluster,
    FeatureSupportLevelID,
    Host,
    HostRequirements,
    MonitoredOperator,
    OperatorHardwareRequirements,
    OperatorType,
    ValidationResult,
)
from installer.operators.versions import version_at_least

from .config import LVMConfig

Operator = MonitoredOperator(
    name="lvm",
    display_name="Logical Volume Manager Storage",
    namespace="openshift-storage",
    operator_type=OperatorType.OLM,
    subscription_name="lvms-operator",
    timeout_seconds=30 * 60,
)

ELIGIBLE_DRIVE_TYPES = frozenset({"HDD", "SSD"})


class LVMOperator(OperatorPlugin):
    """Local storage through LVM volume groups built from spare host disks."""

    def __init__(self, log: logging.Logger | None = None, config: LVMConfig | None = None):
        self.log = log or logging.getLogger(__name__)
        self.config = config or LVMConfig()

    @property
    def name(self) -> str:
        return Operator.name

    @property
    def full_name(self) -> str:
        return Operator.display_name

    @property
    def cluster_validation_id(self) -> str:
        return "lvm-requirements-satisfied"

    @property
    def host_validation_id(self) -> str:
        return "lvm-requirements-satisfied"

    @property
    def feature_support_id(self) -> FeatureSupportLevelID:
        return FeatureSupportLevelID.LVM

    def get_dependencies(self, cluster: Cluster | None) -> list[str]:
        return []

    async def validate_cluster(self, cluster: Cluster) -> ValidationResult:
        if not cluster.openshift_version:
            return ValidationResult.pending(self.cluster_validation_id, "OpenShift version is not set yet")
        try:
            supported = version_at_least(cluster.openshift_version, self.config.min_openshift_version)
        except ValueError as exc:
            return ValidationResult.failure(self.cluster_validation_id, str(exc))
        if not supported:
            return ValidationResult.failure(
                self.cluster_validation_id,
                f"{self.full_name} is only supported for openshift versions "
                f"{self.config.min_openshift_version} and above",
            )
        return ValidationResult.success(self.cluster_validation_id)

    async def validate_host(
        self,
        cluster: Cluster,
        host: Host,
        host_requirements: HostRequirements,
    ) -> ValidationResult:
        eligible = [
            disk
            for disk in host.inventory.disks
            if disk.id != host.installation_disk_id
            and disk.drive_type in ELIGIBLE_DRIVE_TYPES
            and not disk.bootable
            and disk.size_bytes > 0
        ]
        if not eligible:
            return ValidationResult.failure(
                self.host_validation_id,
                f"{self.full_name} requires at least one non-installation HDD/SSD disk on the host",
            )
        return ValidationResult.success(self.host_validation_id)

    def get_monitored_operator(self) -> MonitoredOperator:
        return Operator

    async def get_preflight_requirements(self, cluster: Cluster) -> OperatorHardwareRequirements:
        per_host = HostRequirements(
            cpu_cores=self.config.cpu_per_host,
            ram_mib=self.config.memory_mib_per_host,
        )
        return self.build_preflight_requirements(cluster, master=per_host, worker=per_host)
