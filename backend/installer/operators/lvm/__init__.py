"""Logical Volume Manager Storage operator plugin."""

from .config import LVMConfig
from .operator import Operator, LVMOperator

__all__ = ["Operator", "LVMConfig", "LVMOperator"]
