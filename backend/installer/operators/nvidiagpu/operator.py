"""Built-in NVIDIA GPU operator plugin."""

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
from installer.operators import nodefeaturediscovery

Operator = MonitoredOperator(
    name="nvidia-gpu",
    display_name="NVIDIA GPU",
    namespace="nvidia-gpu-operator",
    operator_type=OperatorType.OLM,
    subscription_name="gpu-operator-certified",
    timeout_seconds=30 * 60,
)


class NvidiaGPUOperator(OperatorPlugin):
    """NVIDIA GPU OLM operator plugin.

    GPU presence is checked by the operator itself once it runs on the
    cluster, so both validations pass and no extra resources are reserved.
    """

    def __init__(self, log: logging.Logger | None = None):
        self.log = log or logging.getLogger(__name__)

    @property
    def name(self) -> str:
        return Operator.name

    @property
    def full_name(self) -> str:
        return Operator.display_name

    @property
    def cluster_validation_id(self) -> str:
        return "nvidia-gpu-requirements-satisfied"

    @property
    def host_validation_id(self) -> str:
        return "nvidia-gpu-requirements-satisfied"

    @property
    def feature_support_id(self) -> FeatureSupportLevelID:
        return FeatureSupportLevelID.NVIDIA_GPU

    def get_dependencies(self, cluster: Cluster | None) -> list[str]:
        return [nodefeaturediscovery.Operator.name]

    async def validate_cluster(self, cluster: Cluster) -> ValidationResult:
        return ValidationResult.success(self.cluster_validation_id)

    async def validate_host(
        self,
        cluster: Cluster,
        host: Host,
        host_requirements: HostRequirements,
    ) -> ValidationResult:
        return ValidationResult.success(self.host_validation_id)

    def get_monitored_operator(self) -> MonitoredOperator:
        return Operator

    async def get_preflight_requirements(self, cluster: Cluster) -> OperatorHardwareRequirements:
        return self.build_preflight_requirements(cluster)
