"""Aggregation of operator hardware requirements.

Requirements are summed over the dependency-ordered operator set. A plugin
whose lookup fails is recorded in the error list and contributes nothing;
the totals of every other operator are still reported so the caller can
decide whether to block the installation or only warn.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from opentelemetry import trace

from installer.observability.context import validation_scope

from .errors import ConfigurationError
from .models import (
    Cluster,
    Host,
    HostRequirements,
    HostRole,
    HostTypeRequirements,
    OperatorHardwareRequirements,
    OperatorHostRequirements,
)
from .registry import OperatorRegistry

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


@dataclass(frozen=True, slots=True)
class OperatorRequirementError:
    """A requirement lookup that failed for one operator."""

    operator_name: str
    message: str
    exception: Exception | None = field(default=None, compare=False, repr=False)

    def to_dict(self) -> dict[str, str]:
        return {"operator_name": self.operator_name, "message": self.message}


@dataclass(frozen=True, slots=True)
class AggregatedRequirements:
    """Cluster-wide requirement totals, split by host class."""

    total: HostTypeRequirements
    per_operator: tuple[OperatorHardwareRequirements, ...] = ()
    errors: tuple[OperatorRequirementError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def for_role(self, role: HostRole) -> HostRequirements:
        return self.total.for_role(role)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total.to_dict(),
            "operators": [item.to_dict() for item in self.per_operator],
            "errors": [error.to_dict() for error in self.errors],
        }


@dataclass(frozen=True, slots=True)
class HostRequirementsBreakdown:
    """Requirements every operator places on one host, and their sum."""

    host_id: str
    total: HostRequirements
    per_operator: tuple[OperatorHostRequirements, ...] = ()
    errors: tuple[OperatorRequirementError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        return {
            "host_id": self.host_id,
            "total": self.total.to_dict(),
            "operators": [item.to_dict() for item in self.per_operator],
            "errors": [error.to_dict() for error in self.errors],
        }


class RequirementAggregator:
    """Sums operator requirements in dependency order with per-operator error isolation."""

    def __init__(self, registry: OperatorRegistry):
        self.registry = registry

    async def aggregate(self, cluster: Cluster, names: Iterable[str] | None = None) -> AggregatedRequirements:
        """Aggregate preflight requirements of the requested operators.

        Args:
            cluster: Cluster snapshot.
            names: Operators to aggregate; defaults to the cluster's requested operators.
                Transitive dependencies are always included.

        Raises:
            ConfigurationError: If the operator set cannot be resolved.
        """
        names = cluster.operators if names is None else names
        with validation_scope(cluster.id), tracer.start_as_current_span("operators.aggregate") as span:
            span.set_attribute("cluster.id", cluster.id)
            plugins = self.registry.resolve_order(names, cluster)

            total = HostTypeRequirements()
            per_operator: list[OperatorHardwareRequirements] = []
            errors: list[OperatorRequirementError] = []
            for plugin in plugins:
                try:
                    requirements = await plugin.get_preflight_requirements(cluster)
                except ConfigurationError:
                    raise
                except Exception as exc:
                    logger.warning("Cannot retrieve preflight requirements of operator %s: %s", plugin.name, exc)
                    errors.append(OperatorRequirementError(plugin.name, str(exc) or type(exc).__name__, exc))
                    continue
                per_operator.append(requirements)
                total = total + requirements.requirements

            span.set_attribute("operators.count", len(plugins))
            span.set_attribute("operators.errors", len(errors))
            return AggregatedRequirements(total=total, per_operator=tuple(per_operator), errors=tuple(errors))

    async def host_requirements(
        self,
        cluster: Cluster,
        host: Host,
        names: Iterable[str] | None = None,
    ) -> HostRequirementsBreakdown:
        """Requirements each operator places on ``host``, honouring role-specific plugins.

        Raises:
            ConfigurationError: If the operator set cannot be resolved.
        """
        names = cluster.operators if names is None else names
        with validation_scope(cluster.id, host.id), tracer.start_as_current_span("operators.host_requirements") as span:
            span.set_attribute("cluster.id", cluster.id)
            span.set_attribute("host.id", host.id)
            plugins = self.registry.resolve_order(names, cluster)

            total = HostRequirements.zero()
            per_operator: list[OperatorHostRequirements] = []
            errors: list[OperatorRequirementError] = []
            for plugin in plugins:
                try:
                    requirements = await plugin.get_host_requirements(cluster, host)
                except ConfigurationError:
                    raise
                except Exception as exc:
                    logger.warning("Cannot retrieve host requirements of operator %s: %s", plugin.name, exc)
                    errors.append(OperatorRequirementError(plugin.name, str(exc) or type(exc).__name__, exc))
                    continue
                per_operator.append(OperatorHostRequirements(operator_name=plugin.name, requirements=requirements))
                total = total + requirements

            return HostRequirementsBreakdown(
                host_id=host.id,
                total=total,
                per_operator=tuple(per_operator),
                errors=tuple(errors),
            )
