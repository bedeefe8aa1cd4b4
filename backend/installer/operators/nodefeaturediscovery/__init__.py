"""Node Feature Discovery operator plugin."""

from .operator import Operator, NodeFeatureDiscoveryOperator

__all__ = ["Operator", "NodeFeatureDiscoveryOperator"]
