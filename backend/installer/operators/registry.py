"""Registry for operator plugins and dependency resolution."""

from __future__ import annotations

import heapq
import logging
from collections import deque
from collections.abc import Iterable

from .base import OperatorPlugin
from .errors import (
    CyclicDependencyError,
    DuplicateOperatorError,
    DuplicateValidationIdError,
    MissingDependencyError,
    OperatorNotFoundError,
    SelfDependencyError,
)
from .models import Cluster, MonitoredOperator, OperatorProperty, OperatorType

logger = logging.getLogger(__name__)


class OperatorRegistry:
    """In-memory registry for operator plugins.

    Plugins are registered once at startup. Every query afterwards only reads
    the registry, so one instance can serve concurrent validation calls.
    """

    def __init__(self) -> None:
        self._plugins: dict[str, OperatorPlugin] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)

    def register(self, plugin: OperatorPlugin) -> None:
        """Register a plugin by its ``name``.

        Raises:
            DuplicateOperatorError: If the name is already registered.
        """

        name = plugin.name.strip()
        if not name:
            raise ValueError("Operator name cannot be empty")
        if name in self._plugins:
            raise DuplicateOperatorError(f"Operator already registered: {name}")
        self._plugins[name] = plugin
        logger.debug("Registered operator plugin %s (%s)", name, type(plugin).__name__)

    def register_many(self, plugins: Iterable[OperatorPlugin]) -> None:
        """Register multiple plugins."""

        for plugin in plugins:
            self.register(plugin)

    def get(self, name: str) -> OperatorPlugin:
        """Get a plugin by operator name.

        Raises:
            OperatorNotFoundError: If the operator is not registered.
        """

        try:
            return self._plugins[name]
        except KeyError as exc:
            raise OperatorNotFoundError(f"Operator not found: {name}") from exc

    def supported_operators(self) -> list[str]:
        """Names of all registered operators, in registration order."""

        return list(self._plugins)

    def monitored_operators(self) -> list[MonitoredOperator]:
        """Descriptors of all registered operators, in registration order."""

        return [plugin.get_monitored_operator() for plugin in self._plugins.values()]

    def operators_by_type(self, operator_type: OperatorType) -> list[OperatorPlugin]:
        """Plugins whose operator is installed with the given mechanism."""

        return [
            plugin
            for plugin in self._plugins.values()
            if plugin.get_monitored_operator().operator_type == operator_type
        ]

    def get_operator_properties(self, name: str) -> list[OperatorProperty]:
        """Properties exposed by the named operator."""

        return self.get(name).get_properties()

    def check_validation_ids(self) -> None:
        """Ensure cluster and host validation ids are unique across operators.

        Raises:
            DuplicateValidationIdError: On the first clash found.
        """

        for kind, attribute in (("cluster", "cluster_validation_id"), ("host", "host_validation_id")):
            owners: dict[str, str] = {}
            for name, plugin in self._plugins.items():
                validation_id = getattr(plugin, attribute)
                if validation_id in owners:
                    raise DuplicateValidationIdError(
                        f"{kind.capitalize()} validation id {validation_id!r} is used by "
                        f"{owners[validation_id]} and {name}"
                    )
                owners[validation_id] = name

    def expand_dependencies(self, names: Iterable[str], cluster: Cluster | None = None) -> list[str]:
        """Requested operator names plus all transitive dependencies, in install order."""

        return [plugin.name for plugin in self.resolve_order(names, cluster)]

    def resolve_order(self, names: Iterable[str], cluster: Cluster | None = None) -> list[OperatorPlugin]:
        """Order the requested operators and their dependencies for installation.

        Every operator appears exactly once and after all of its dependencies.
        Operators that become ready at the same time keep registration order.

        Raises:
            OperatorNotFoundError: If a requested operator is not registered.
            MissingDependencyError: If a dependency is not registered.
            SelfDependencyError: If an operator depends on itself.
            CyclicDependencyError: If the dependencies form a cycle.
        """

        graph = self._dependency_graph(names, cluster)
        rank = {name: index for index, name in enumerate(self._plugins)}

        remaining = {name: len(deps) for name, deps in graph.items()}
        dependants: dict[str, list[str]] = {name: [] for name in graph}
        for name, deps in graph.items():
            for dep in deps:
                dependants[dep].append(name)

        ready = [(rank[name], name) for name, count in remaining.items() if count == 0]
        heapq.heapify(ready)
        order: list[str] = []
        while ready:
            _, name = heapq.heappop(ready)
            order.append(name)
            for dependant in dependants[name]:
                remaining[dependant] -= 1
                if remaining[dependant] == 0:
                    heapq.heappush(ready, (rank[dependant], dependant))

        if len(order) != len(graph):
            unresolved = [name for name in self._plugins if name in graph and remaining[name] > 0]
            raise CyclicDependencyError(self._find_cycle(graph, unresolved))

        return [self._plugins[name] for name in order]

    def _dependency_graph(self, names: Iterable[str], cluster: Cluster | None) -> dict[str, list[str]]:
        """Adjacency lists for the requested operators and their transitive dependencies."""

        requested = list(dict.fromkeys(names))
        for name in requested:
            self.get(name)

        graph: dict[str, list[str]] = {}
        queue: deque[str] = deque(requested)
        while queue:
            name = queue.popleft()
            if name in graph:
                continue
            plugin = self._plugins[name]
            deps = list(dict.fromkeys(plugin.get_dependencies(cluster)))
            if name in deps:
                raise SelfDependencyError(name)
            for dep in deps:
                if dep not in self._plugins:
                    raise MissingDependencyError(dep, required_by=name)
                if dep not in graph:
                    queue.append(dep)
            graph[name] = deps
        return graph

    @staticmethod
    def _find_cycle(graph: dict[str, list[str]], unresolved: list[str]) -> list[str]:
        # Every unresolved node still waits on another unresolved node, so
        # following those edges must eventually revisit a node.
        pending = set(unresolved)
        path: list[str] = []
        seen: dict[str, int] = {}
        node = unresolved[0]
        while node not in seen:
            seen[node] = len(path)
            path.append(node)
            node = next(dep for dep in graph[node] if dep in pending)
        return path[seen[node]:] + [node]
