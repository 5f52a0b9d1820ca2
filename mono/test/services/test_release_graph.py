from __future__ import annotations

import random
from pathlib import Path

import pytest

from mono.core.result import Err, Ok
from mono.output.console import MockConsole
from mono.services.release.graph import build_graph, sort_modules
from mono.services.release.model import DependencyEdge, Manifest, Module, Requirement


def _module(path: str, *requires: str, version: str = "v0.1.0") -> Module:
    return Module(
        directory=Path("/repo") / path.rsplit("/", 1)[-1],
        manifest=Manifest(
            path=path,
            version=version,
            requires=[Requirement(r, version) for r in requires],
        ),
    )


def _order(modules: list[Module]) -> list[str]:
    result = sort_modules(build_graph(modules, console=MockConsole()))
    assert isinstance(result, Ok)
    return [m.path for m in result.value]


def test_build_graph_records_intra_repo_edges_only() -> None:
    a = _module("a")
    b = _module("b", "a", "example.org/external")

    graph = build_graph([a, b], console=MockConsole())

    assert graph.edges == (DependencyEdge(dependent="b", dependency="a", version="v0.1.0"),)
    assert graph.modules == {"a": a, "b": b}
    assert graph.deps_of("b") == [graph.edges[0]]
    assert graph.dependents_of("a") == [graph.edges[0]]
    assert graph.deps_of("a") == []


def test_build_graph_keeps_declared_version() -> None:
    a = _module("a")
    b = Module(
        directory=Path("/repo/b"),
        manifest=Manifest(path="b", version="v2.0.0", requires=[Requirement("a", "v0.9.0")]),
    )

    graph = build_graph([a, b], console=MockConsole())

    assert graph.edges[0].version == "v0.9.0"


def test_sort_places_dependencies_first() -> None:
    modules = [_module("c", "a", "b"), _module("b", "a"), _module("a")]

    assert _order(modules) == ["a", "b", "c"]


def test_sort_breaks_ties_by_dependency_count_then_identity() -> None:
    modules = [
        _module("z"),
        _module("y"),
        _module("m", "z", "y"),
        _module("n", "y"),
    ]

    # n (1 dep) and m (2 deps) become ready together once y and z are placed.
    assert _order(modules) == ["y", "z", "n", "m"]


def test_sort_is_independent_of_input_order() -> None:
    modules = [_module("a"), _module("b", "a"), _module("c", "a"), _module("d", "b", "c")]
    expected = _order(list(modules))

    for seed in range(5):
        shuffled = list(modules)
        random.Random(seed).shuffle(shuffled)
        assert _order(shuffled) == expected


def test_sort_single_module() -> None:
    assert _order([_module("a")]) == ["a"]


@pytest.mark.parametrize("seed", range(10))
def test_sort_random_acyclic_graph(seed: int) -> None:
    rng = random.Random(seed)
    names = [f"m{i:02d}" for i in range(20)]
    modules = []
    for i, name in enumerate(names):
        deps = [d for d in names[:i] if rng.random() < 0.3]
        modules.append(_module(name, *deps))
    rng.shuffle(modules)

    order = _order(modules)

    index = {path: i for i, path in enumerate(order)}
    assert sorted(order) == names
    for m in modules:
        for r in m.manifest.requires:
            assert index[r.path] < index[m.path]


def test_sort_detects_cycle() -> None:
    modules = [_module("a", "c"), _module("b", "a"), _module("c", "b"), _module("d")]

    result = sort_modules(build_graph(modules, console=MockConsole()))

    assert isinstance(result, Err)
    assert result.error.kind == "graph_cycle"
    assert "a, b, c" in result.error.message
    assert "d" not in result.error.message.split(":")[-1]


def test_sort_detects_self_dependency() -> None:
    result = sort_modules(build_graph([_module("a", "a")], console=MockConsole()))

    assert isinstance(result, Err)
    assert result.error.kind == "graph_cycle"
