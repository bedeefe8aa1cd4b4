"""NVIDIA GPU operator plugin."""

from .operator import Operator, NvidiaGPUOperator

__all__ = ["Operator", "NvidiaGPUOperator"]
