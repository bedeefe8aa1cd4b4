from __future__ import annotations

import asyncio

import pytest

from installer.operators import (
    Cluster,
    FeatureSupportLevelID,
    Host,
    HostRequirements,
    InfrastructureError,
    MonitoredOperator,
    OperatorHardwareRequirements,
    OperatorPlugin,
    OperatorProperty,
    ValidationResult,
)


class FakeOperator(OperatorPlugin):
    """Configurable operator used to exercise the registry and engine."""

    def __init__(
        self,
        name: str,
        deps: list[str] | None = None,
        master: HostRequirements | None = None,
        worker: HostRequirements | None = None,
        cluster_result: ValidationResult | None = None,
        host_result: ValidationResult | None = None,
        fail_with: Exception | None = None,
        delay: float = 0.0,
        properties: list[OperatorProperty] | None = None,
        validation_id: str | None = None,
        calls: list[str] | None = None,
    ):
        self._name = name
        self._deps = deps or []
        self._master = master
        self._worker = worker
        self._cluster_result = cluster_result
        self._host_result = host_result
        self._fail_with = fail_with
        self._delay = delay
        self._properties = properties or []
        self._validation_id = validation_id or f"{name}-requirements-satisfied"
        self.calls = calls if calls is not None else []

    @property
    def name(self) -> str:
        return self._name

    @property
    def full_name(self) -> str:
        return self._name.upper()

    @property
    def cluster_validation_id(self) -> str:
        return self._validation_id

    @property
    def host_validation_id(self) -> str:
        return self._validation_id

    @property
    def feature_support_id(self) -> FeatureSupportLevelID:
        return FeatureSupportLevelID.LVM

    def get_dependencies(self, cluster: Cluster | None) -> list[str]:
        return list(self._deps)

    async def _maybe_fail(self, what: str) -> None:
        self.calls.append(f"{what}:{self._name}:start")
        if self._delay:
            await asyncio.sleep(self._delay)
        self.calls.append(f"{what}:{self._name}:end")
        if self._fail_with is not None:
            raise self._fail_with

    async def validate_cluster(self, cluster: Cluster) -> ValidationResult:
        await self._maybe_fail("cluster")
        return self._cluster_result or ValidationResult.success(self.cluster_validation_id)

    async def validate_host(self, cluster: Cluster, host: Host, host_requirements: HostRequirements) -> ValidationResult:
        await self._maybe_fail("host")
        return self._host_result or ValidationResult.success(self.host_validation_id)

    async def get_preflight_requirements(self, cluster: Cluster) -> OperatorHardwareRequirements:
        await self._maybe_fail("preflight")
        return self.build_preflight_requirements(cluster, master=self._master, worker=self._worker)

    def get_monitored_operator(self) -> MonitoredOperator:
        return MonitoredOperator(name=self._name, namespace=f"openshift-{self._name}")

    def get_properties(self) -> list[OperatorProperty]:
        return list(self._properties)


@pytest.fixture
def make_operator():
    return FakeOperator


@pytest.fixture
def cluster() -> Cluster:
    return Cluster(id="cluster-1", name="demo", openshift_version="4.15.2")


@pytest.fixture
def lookup_failure() -> InfrastructureError:
    return InfrastructureError("inventory lookup failed")
