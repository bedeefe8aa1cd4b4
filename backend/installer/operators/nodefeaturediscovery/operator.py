"""Built-in Node Feature Discovery operator plugin."""

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

Operator = MonitoredOperator(
    name="node-feature-discovery",
    display_name="Node Feature Discovery",
    namespace="openshift-nfd",
    operator_type=OperatorType.OLM,
    subscription_name="nfd",
    timeout_seconds=30 * 60,
)


class NodeFeatureDiscoveryOperator(OperatorPlugin):
    """Labels nodes with their hardware features; other operators build on those labels."""

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
        return "node-feature-discovery-requirements-satisfied"

    @property
    def host_validation_id(self) -> str:
        return "node-feature-discovery-requirements-satisfied"

    @property
    def feature_support_id(self) -> FeatureSupportLevelID:
        return FeatureSupportLevelID.NODE_FEATURE_DISCOVERY

    def get_dependencies(self, cluster: Cluster | None) -> list[str]:
        return []

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
