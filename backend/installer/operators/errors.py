"""Typed errors for operator plugins and registry operations."""

from __future__ import annotations

from collections.abc import Sequence


class OperatorError(Exception):
    """Base class for operator plugin related errors."""


class ConfigurationError(OperatorError):
    """Raised when the registered operator set is inconsistent.

    Configuration errors are fatal: they abort the resolve, aggregate or
    validate call that detected them.
    """


class DuplicateOperatorError(ConfigurationError):
    """Raised when registering an operator with an existing name."""


class OperatorNotFoundError(ConfigurationError):
    """Raised when an operator cannot be found by name."""


class MissingDependencyError(ConfigurationError):
    """Raised when a declared dependency is not registered."""

    def __init__(self, name: str, required_by: str | None = None):
        self.name = name
        self.required_by = required_by
        message = f"Missing dependency: {name}"
        if required_by:
            message += f" (required by {required_by})"
        super().__init__(message)


class CyclicDependencyError(ConfigurationError):
    """Raised when operator dependencies form a cycle."""

    def __init__(self, cycle: Sequence[str]):
        self.cycle = list(cycle)
        super().__init__(f"Cyclic dependency: {' -> '.join(self.cycle)}")


class SelfDependencyError(CyclicDependencyError):
    """Raised when an operator lists itself as a dependency."""

    def __init__(self, name: str):
        self.name = name
        super().__init__([name, name])


class DuplicateValidationIdError(ConfigurationError):
    """Raised when two operators share a cluster or host validation id."""


class InfrastructureError(OperatorError):
    """Raised by a plugin when an underlying lookup fails.

    Infrastructure errors are isolated to the operator that raised them.
    """
