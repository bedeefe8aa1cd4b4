"""OpenShift Virtualization operator plugin."""

from .config import CNVConfig
from .operator import Operator, CNVOperator

__all__ = ["Operator", "CNVConfig", "CNVOperator"]
