"""Built-in OpenShift Virtualization operator plugin."""

from __future__ import annotations

import logging

from installer.operators.base import OperatorPlugin
from installer.operators.models import (
    Cluster,
    FeatureSupportLevelID,
    Host,
    HostRequirements,
    HostRole,
    MonitoredOperator,
    OperatorHardwareRequirements,
    OperatorType,
    ValidationResult,
)
from installer.operators import lvm

from .config import CNVConfig

Operator = MonitoredOperator(
    name="cnv",
    display_name="OpenShift Virtualization",
    namespace="openshift-cnv",
    operator_type=OperatorType.OLM,
    subscription_name="hco-operatorhub",
    timeout_seconds=60 * 60,
)

# CPU flags advertising hardware virtualization (Intel VT-x, AMD-V)
VIRTUALIZATION_FLAGS = frozenset({"vmx", "svm"})


class CNVOperator(OperatorPlugin):
    """OpenShift Virtualization operator plugin.

    Single-node clusters have no shared storage, so the plugin pulls in LVM
    there. Control plane and worker hosts carry different overheads.
    """

    def __init__(self, log: logging.Logger | None = None, config: CNVConfig | None = None):
        self.log = log or logging.getLogger(__name__)
        self.config = config or CNVConfig()

    @property
    def name(self) -> str:
        return Operator.name

    @property
    def full_name(self) -> str:
        return Operator.display_name

    @property
    def cluster_validation_id(self) -> str:
        return "cnv-requirements-satisfied"

    @property
    def host_validation_id(self) -> str:
        return "cnv-requirements-satisfied"

    @property
    def feature_support_id(self) -> FeatureSupportLevelID:
        return FeatureSupportLevelID.CNV

    def get_dependencies(self, cluster: Cluster | None) -> list[str]:
        if cluster is not None and cluster.is_single_node:
            return [lvm.Operator.name]
        return []

    async def validate_cluster(self, cluster: Cluster) -> ValidationResult:
        unsupported = sorted(
            {
                host.inventory.cpu.architecture
                for host in cluster.hosts
                if host.inventory.cpu.architecture not in self.config.supported_architectures
            }
        )
        if unsupported:
            return ValidationResult.failure(
                self.cluster_validation_id,
                f"{self.full_name} is not supported on CPU architecture {', '.join(unsupported)}",
            )
        return ValidationResult.success(self.cluster_validation_id)

    async def validate_host(
        self,
        cluster: Cluster,
        host: Host,
        host_requirements: HostRequirements,
    ) -> ValidationResult:
        flags = set(host.inventory.cpu.flags)
        if not flags & VIRTUALIZATION_FLAGS:
            return ValidationResult.failure(
                self.host_validation_id,
                "CPU does not have virtualization support (vmx or svm flag)",
            )
        return ValidationResult.success(self.host_validation_id)

    def get_monitored_operator(self) -> MonitoredOperator:
        return Operator

    async def get_preflight_requirements(self, cluster: Cluster) -> OperatorHardwareRequirements:
        return self.build_preflight_requirements(
            cluster,
            master=HostRequirements(cpu_cores=self.config.master_cpu, ram_mib=self.config.master_memory_mib),
            worker=HostRequirements(cpu_cores=self.config.worker_cpu, ram_mib=self.config.worker_memory_mib),
        )

    async def get_host_requirements(self, cluster: Cluster, host: Host) -> HostRequirements:
        preflight = await self.get_preflight_requirements(cluster)
        if host.effective_role == HostRole.MASTER:
            return preflight.requirements.master
        return preflight.requirements.worker
