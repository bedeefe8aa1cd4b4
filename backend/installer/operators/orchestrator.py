"""Cluster and host validation across the operator set.

Plugins are validated in dependency order. Whatever happens inside a plugin,
the caller receives exactly one ``ValidationResult`` per operator:

- a returned result is passed through,
- a raised exception becomes a ``failure`` result carrying the error text,
- a plugin that did not finish before the deadline gets a ``pending`` result
  and the whole report is marked ``cancelled``.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Awaitable, Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from opentelemetry import trace

from installer.config import Settings, get_settings
from installer.observability.context import validation_scope

from .base import OperatorPlugin
from .models import Cluster, Host, HostRequirements, ValidationResult, ValidationStatus
from .registry import OperatorRegistry

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

CANCELLED_REASON = "validation cancelled before completion"

# Marks a call that uses the orchestrator-wide deadline.
DEFAULT_TIMEOUT: Any = object()


class ValidationOutcome(str, Enum):
    """Overall verdict of a validation run."""
    PASSED = "passed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class ValidationReport:
    """Ordered validation results of one run and the combined verdict."""

    results: tuple[ValidationResult, ...]
    outcome: ValidationOutcome

    @property
    def ready(self) -> bool:
        """True when every operator validation succeeded."""
        return self.outcome == ValidationOutcome.PASSED

    @property
    def failures(self) -> list[ValidationResult]:
        return [result for result in self.results if result.status == ValidationStatus.FAILURE]

    def __iter__(self) -> Iterator[ValidationResult]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)

    def to_dict(self) -> dict[str, Any]:
        return {
            "outcome": self.outcome.value,
            "ready": self.ready,
            "results": [result.to_dict() for result in self.results],
        }


PluginCall = Callable[[OperatorPlugin], Awaitable[ValidationResult]]
ValidationIdOf = Callable[[OperatorPlugin], str]


class ValidationOrchestrator:
    """Runs operator validations and folds them into a single report.

    Args:
        registry: Registry holding the operator plugins.
        parallel: Validate operators with no path between them concurrently.
        timeout: Deadline in seconds for a whole run; ``None`` disables it.
    """

    def __init__(self, registry: OperatorRegistry, parallel: bool = False, timeout: float | None = None):
        self.registry = registry
        self.parallel = parallel
        self.timeout = timeout

    @classmethod
    def from_settings(cls, registry: OperatorRegistry, settings: Settings | None = None) -> ValidationOrchestrator:
        settings = settings or get_settings()
        return cls(
            registry,
            parallel=settings.parallel_validation,
            timeout=settings.validation_timeout_seconds,
        )

    async def validate_cluster(
        self,
        cluster: Cluster,
        names: Iterable[str] | None = None,
        *,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> ValidationReport:
        """Validate the cluster against every requested operator and its dependencies.

        ``timeout`` overrides the orchestrator deadline for this call only;
        ``None`` disables it.

        Raises:
            ConfigurationError: If the operator set cannot be resolved.
        """
        names = cluster.operators if names is None else names
        with validation_scope(cluster.id), tracer.start_as_current_span("operators.validate_cluster") as span:
            span.set_attribute("cluster.id", cluster.id)
            plugins = self.registry.resolve_order(names, cluster)
            report = await self._run(
                cluster,
                plugins,
                validation_id_of=lambda plugin: plugin.cluster_validation_id,
                call=lambda plugin: plugin.validate_cluster(cluster),
                timeout=timeout,
            )
            span.set_attribute("validation.outcome", report.outcome.value)
            return report

    async def validate_host(
        self,
        cluster: Cluster,
        host: Host,
        host_requirements: HostRequirements,
        names: Iterable[str] | None = None,
        *,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> ValidationReport:
        """Validate one host against every requested operator and its dependencies.

        Raises:
            ConfigurationError: If the operator set cannot be resolved.
        """
        names = cluster.operators if names is None else names
        with validation_scope(cluster.id, host.id), tracer.start_as_current_span("operators.validate_host") as span:
            span.set_attribute("cluster.id", cluster.id)
            span.set_attribute("host.id", host.id)
            plugins = self.registry.resolve_order(names, cluster)
            report = await self._run(
                cluster,
                plugins,
                validation_id_of=lambda plugin: plugin.host_validation_id,
                call=lambda plugin: plugin.validate_host(cluster, host, host_requirements),
                timeout=timeout,
            )
            span.set_attribute("validation.outcome", report.outcome.value)
            return report

    async def _run(
        self,
        cluster: Cluster,
        plugins: list[OperatorPlugin],
        validation_id_of: ValidationIdOf,
        call: PluginCall,
        timeout: float | None = DEFAULT_TIMEOUT,
    ) -> ValidationReport:
        if timeout is DEFAULT_TIMEOUT:
            timeout = self.timeout
        results: dict[str, ValidationResult] = {}

        async def run_one(plugin: OperatorPlugin) -> None:
            results[plugin.name] = await self._call_plugin(plugin, validation_id_of(plugin), call)

        cancelled = False
        try:
            async with asyncio.timeout(timeout):
                if self.parallel:
                    for wave in self._waves(cluster, plugins):
                        await asyncio.gather(*(run_one(plugin) for plugin in wave))
                else:
                    for plugin in plugins:
                        await run_one(plugin)
        except TimeoutError:
            cancelled = True
            logger.warning(
                "Operator validation cancelled after %ss with %d of %d operators done",
                timeout,
                len(results),
                len(plugins),
            )

        ordered = tuple(
            results.get(plugin.name) or ValidationResult.pending(validation_id_of(plugin), CANCELLED_REASON)
            for plugin in plugins
        )
        if cancelled:
            outcome = ValidationOutcome.CANCELLED
        elif all(result.status == ValidationStatus.SUCCESS for result in ordered):
            outcome = ValidationOutcome.PASSED
        else:
            outcome = ValidationOutcome.FAILED
        logger.info("Validated %d operators: %s", len(ordered), outcome.value)
        return ValidationReport(results=ordered, outcome=outcome)

    async def _call_plugin(self, plugin: OperatorPlugin, validation_id: str, call: PluginCall) -> ValidationResult:
        with tracer.start_as_current_span("operators.plugin_validation") as span:
            span.set_attribute("operator.name", plugin.name)
            span.set_attribute("validation.id", validation_id)
            try:
                result = await call(plugin)
            except Exception as exc:  # plugin infrastructure failures are reported as data
                logger.warning("Validation %s of operator %s errored: %s", validation_id, plugin.name, exc)
                result = ValidationResult.failure(validation_id, str(exc) or type(exc).__name__)
            if not result.validation_id:
                result = dataclasses.replace(result, validation_id=validation_id)
            span.set_attribute("validation.status", result.status.value)
            return result

    @staticmethod
    def _waves(cluster: Cluster, plugins: list[OperatorPlugin]) -> Iterator[list[OperatorPlugin]]:
        """Group resolved plugins into batches whose dependencies all ran in earlier batches."""
        resolved = {plugin.name for plugin in plugins}
        deps = {
            plugin.name: [dep for dep in plugin.get_dependencies(cluster) if dep in resolved]
            for plugin in plugins
        }
        done: set[str] = set()
        remaining = list(plugins)
        while remaining:
            wave = [plugin for plugin in remaining if all(dep in done for dep in deps[plugin.name])]
            yield wave
            done.update(plugin.name for plugin in wave)
            remaining = [plugin for plugin in remaining if plugin.name not in done]
