"""Bootstrap helpers for built-in operator plugin registration."""

from __future__ import annotations

import logging

from installer.config import Settings, get_settings
from installer.observability import configure_logging
from installer.observability.otel import configure_tracing

from .aggregator import RequirementAggregator
from .cnv import CNVConfig, CNVOperator
from .lvm import LVMConfig, LVMOperator
from .nodefeaturediscovery import NodeFeatureDiscoveryOperator
from .nvidiagpu import NvidiaGPUOperator
from .orchestrator import ValidationOrchestrator
from .registry import OperatorRegistry

logger = logging.getLogger(__name__)


def build_default_registry() -> OperatorRegistry:
    """Build a registry populated with the built-in operator plugins.

    Each plugin loads its environment configuration here, once. The registry
    is checked for clashing validation ids before it is handed out.
    """

    registry = OperatorRegistry()
    registry.register_many(
        [
            NodeFeatureDiscoveryOperator(log=logging.getLogger("installer.operators.nodefeaturediscovery")),
            NvidiaGPUOperator(log=logging.getLogger("installer.operators.nvidiagpu")),
            LVMOperator(log=logging.getLogger("installer.operators.lvm"), config=LVMConfig()),
            CNVOperator(log=logging.getLogger("installer.operators.cnv"), config=CNVConfig()),
        ]
    )
    registry.check_validation_ids()
    logger.info("Registered %d operator plugins: %s", len(registry), ", ".join(registry.supported_operators()))
    return registry


def build_services(
    registry: OperatorRegistry | None = None,
    settings: Settings | None = None,
) -> tuple[OperatorRegistry, RequirementAggregator, ValidationOrchestrator]:
    """Wire the registry into an aggregator and an orchestrator."""

    settings = settings or get_settings()
    registry = registry or build_default_registry()
    return (
        registry,
        RequirementAggregator(registry),
        ValidationOrchestrator.from_settings(registry, settings),
    )


def initialize(
    settings: Settings | None = None,
) -> tuple[OperatorRegistry, RequirementAggregator, ValidationOrchestrator]:
    """Process startup: configure logging and tracing, then build the services."""

    settings = settings or get_settings()
    configure_logging(settings)
    configure_tracing(settings)
    return build_services(settings=settings)
