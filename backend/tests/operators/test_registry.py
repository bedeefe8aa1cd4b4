from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from installer.operators import (
    Cluster,
    ConfigurationError,
    CyclicDependencyError,
    DuplicateOperatorError,
    DuplicateValidationIdError,
    MissingDependencyError,
    OperatorNotFoundError,
    OperatorProperty,
    OperatorRegistry,
    OperatorType,
    PropertyDataType,
    SelfDependencyError,
)


def names(plugins):
    return [plugin.name for plugin in plugins]


def test_register_and_get_operator(make_operator):
    registry = OperatorRegistry()
    plugin = make_operator("lvm")

    registry.register(plugin)

    assert registry.get("lvm") is plugin
    assert "lvm" in registry
    assert len(registry) == 1


def test_register_duplicate_operator_raises(make_operator):
    registry = OperatorRegistry()
    registry.register(make_operator("lvm"))

    with pytest.raises(DuplicateOperatorError, match="already registered"):
        registry.register(make_operator("lvm"))


def test_register_empty_name_raises(make_operator):
    registry = OperatorRegistry()

    with pytest.raises(ValueError, match="cannot be empty"):
        registry.register(make_operator("  "))


def test_get_unknown_operator_raises_not_found():
    registry = OperatorRegistry()

    with pytest.raises(OperatorNotFoundError, match="Operator not found"):
        registry.get("missing")


def test_supported_operators_keep_registration_order(make_operator):
    registry = OperatorRegistry()
    registry.register_many([make_operator("zeta"), make_operator("alpha"), make_operator("mid")])

    assert registry.supported_operators() == ["zeta", "alpha", "mid"]
    assert [op.name for op in registry.monitored_operators()] == ["zeta", "alpha", "mid"]


def test_operators_by_type(make_operator):
    registry = OperatorRegistry()
    registry.register_many([make_operator("a"), make_operator("b")])

    assert names(registry.operators_by_type(OperatorType.OLM)) == ["a", "b"]
    assert registry.operators_by_type(OperatorType.BUILTIN) == []


def test_get_operator_properties(make_operator):
    prop = OperatorProperty(name="enabled", data_type=PropertyDataType.BOOLEAN, default_value="true")
    registry = OperatorRegistry()
    registry.register(make_operator("a", properties=[prop]))

    assert registry.get_operator_properties("a") == [prop]


def test_gpu_resolves_after_node_feature_discovery(make_operator):
    registry = OperatorRegistry()
    registry.register_many(
        [
            make_operator("nvidia-gpu", deps=["node-feature-discovery"]),
            make_operator("node-feature-discovery"),
        ]
    )

    assert names(registry.resolve_order(["nvidia-gpu"])) == ["node-feature-discovery", "nvidia-gpu"]


def test_missing_dependency_is_named(make_operator):
    registry = OperatorRegistry()
    registry.register(make_operator("nvidia-gpu", deps=["node-feature-discovery"]))

    with pytest.raises(MissingDependencyError) as excinfo:
        registry.resolve_order(["nvidia-gpu"])

    assert excinfo.value.name == "node-feature-discovery"
    assert excinfo.value.required_by == "nvidia-gpu"
    assert isinstance(excinfo.value, ConfigurationError)


def test_unknown_requested_operator_raises_not_found(make_operator):
    registry = OperatorRegistry()
    registry.register(make_operator("lvm"))

    with pytest.raises(OperatorNotFoundError):
        registry.resolve_order(["lvm", "odf"])


def test_two_node_cycle_raises(make_operator):
    registry = OperatorRegistry()
    registry.register_many([make_operator("a", deps=["b"]), make_operator("b", deps=["a"])])

    with pytest.raises(CyclicDependencyError) as excinfo:
        registry.resolve_order(["a"])

    assert excinfo.value.cycle == ["a", "b", "a"]
    assert "a -> b -> a" in str(excinfo.value)


def test_cycle_behind_acyclic_prefix_is_reported(make_operator):
    registry = OperatorRegistry()
    registry.register_many(
        [
            make_operator("root", deps=["x"]),
            make_operator("x", deps=["y"]),
            make_operator("y", deps=["z"]),
            make_operator("z", deps=["x"]),
            make_operator("leaf"),
        ]
    )

    with pytest.raises(CyclicDependencyError) as excinfo:
        registry.resolve_order(["leaf", "root"])

    cycle = excinfo.value.cycle
    assert cycle[0] == cycle[-1]
    assert set(cycle) == {"x", "y", "z"}


def test_self_dependency_raises(make_operator):
    registry = OperatorRegistry()
    registry.register(make_operator("a", deps=["a"]))

    with pytest.raises(SelfDependencyError, match="Cyclic dependency: a -> a") as excinfo:
        registry.resolve_order(["a"])

    assert isinstance(excinfo.value, CyclicDependencyError)
    assert excinfo.value.cycle == ["a", "a"]


def test_transitive_dependencies_appear_once_before_dependants(make_operator):
    registry = OperatorRegistry()
    registry.register_many(
        [
            make_operator("app", deps=["db", "cache"]),
            make_operator("cache", deps=["base"]),
            make_operator("db", deps=["base", "storage"]),
            make_operator("storage", deps=["base"]),
            make_operator("base"),
            make_operator("unrelated"),
        ]
    )

    order = names(registry.resolve_order(["app", "db"]))

    assert sorted(order) == ["app", "base", "cache", "db", "storage"]
    position = {name: index for index, name in enumerate(order)}
    for plugin_name in order:
        for dep in registry.get(plugin_name).get_dependencies(None):
            assert position[dep] < position[plugin_name]


def test_ties_are_broken_by_registration_order_not_name(make_operator):
    registry = OperatorRegistry()
    registry.register_many([make_operator("zeta"), make_operator("alpha"), make_operator("mid")])

    assert names(registry.resolve_order(["mid", "alpha", "zeta"])) == ["zeta", "alpha", "mid"]


def test_resolve_order_is_idempotent_and_thread_safe(make_operator):
    registry = OperatorRegistry()
    registry.register_many(
        [
            make_operator("c", deps=["a"]),
            make_operator("b", deps=["a"]),
            make_operator("a"),
        ]
    )

    first = names(registry.resolve_order(["c", "b"]))
    with ThreadPoolExecutor(max_workers=8) as pool:
        orders = list(pool.map(lambda _: names(registry.resolve_order(["c", "b"])), range(32)))

    assert first == ["a", "c", "b"]
    assert all(order == first for order in orders)


def test_duplicate_requested_names_are_collapsed(make_operator):
    registry = OperatorRegistry()
    registry.register(make_operator("a"))

    assert names(registry.resolve_order(["a", "a"])) == ["a"]


def test_dependencies_can_depend_on_cluster(make_operator):
    class SnoAware(make_operator):
        def get_dependencies(self, cluster):
            return ["lvm"] if cluster is not None and cluster.is_single_node else []

    registry = OperatorRegistry()
    registry.register_many([SnoAware("cnv"), make_operator("lvm")])

    sno = Cluster(id="c1", high_availability_mode="None")
    ha = Cluster(id="c2", high_availability_mode="Full")

    assert registry.expand_dependencies(["cnv"], sno) == ["lvm", "cnv"]
    assert registry.expand_dependencies(["cnv"], ha) == ["cnv"]


def test_check_validation_ids_detects_clash(make_operator):
    registry = OperatorRegistry()
    registry.register_many(
        [
            make_operator("a", validation_id="shared-requirements-satisfied"),
            make_operator("b", validation_id="shared-requirements-satisfied"),
        ]
    )

    with pytest.raises(DuplicateValidationIdError, match="used by a and b"):
        registry.check_validation_ids()


def test_check_validation_ids_accepts_unique_ids(make_operator):
    registry = OperatorRegistry()
    registry.register_many([make_operator("a"), make_operator("b")])

    registry.check_validation_ids()
