from __future__ import annotations

import heapq

from mono.core.result import Err, Ok, Result
from mono.output.console import ConsoleProtocol
from mono.services.release.errors import ReleaseError
from mono.services.release.model import DependencyEdge, Module, ModuleGraph


def build_graph(modules: list[Module], *, console: ConsoleProtocol) -> ModuleGraph:
    """Resolve every requirement against the discovered modules.

    Requirements on anything outside the repository produce no edge.
    """
    arena = {m.path: m for m in modules}
    edges: list[DependencyEdge] = []
    for m in modules:
        for r in m.manifest.requires:
            if r.path not in arena:
                continue
            edges.append(DependencyEdge(dependent=m.path, dependency=r.path, version=r.version))
            console.debug(f"{m.path}: found interdependency {r.path}@{r.version}")
    return ModuleGraph(modules=arena, edges=tuple(edges))


def sort_modules(graph: ModuleGraph) -> Result[list[Module], ReleaseError]:
    """Order modules so that each one follows all of its dependencies.

    Kahn's algorithm. Among modules that are ready at the same time, the one
    with fewer dependencies goes first, then the lower identity, so the order
    is reproducible for a given set of modules.
    """
    dep_count: dict[str, int] = {path: 0 for path in graph.modules}
    dependents: dict[str, list[str]] = {path: [] for path in graph.modules}
    for e in graph.edges:
        dep_count[e.dependent] += 1
        dependents[e.dependency].append(e.dependent)

    remaining = dict(dep_count)
    ready = [(0, path) for path, n in remaining.items() if n == 0]
    heapq.heapify(ready)

    order: list[Module] = []
    while ready:
        _, path = heapq.heappop(ready)
        order.append(graph.modules[path])
        for dependent in dependents[path]:
            remaining[dependent] -= 1
            if remaining[dependent] == 0:
                heapq.heappush(ready, (dep_count[dependent], dependent))

    if len(order) < len(graph.modules):
        placed = {m.path for m in order}
        stuck = sorted(path for path in graph.modules if path not in placed)
        return Err(
            ReleaseError(
                kind="graph_cycle",
                message=f"dependency cycle between modules: {', '.join(stuck)}",
                hint="modules in a monorepo must not depend on each other in a cycle",
            )
        )
    return Ok(order)
