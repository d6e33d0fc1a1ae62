"""Entity dependency graph: cycle detection and topological ordering."""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple
from schemasynth.ir.schema import DatasetSchema
from schemasynth.errors import InternalOrderingError
from schemasynth.config.logging import get_logger

logger = get_logger(__name__)


@dataclass
class DependencyGraph:
    """
    Entities as indexed nodes with adjacency lists.

    ``dependencies[i]`` lists the nodes entity ``i`` references (it must be
    generated after them); ``dependents[i]`` is the reverse edge list, from a
    referenced entity to the entities that reference it.
    """

    nodes: List[str]
    index: Dict[str, int] = field(default_factory=dict)
    dependencies: List[List[int]] = field(default_factory=list)
    dependents: List[List[int]] = field(default_factory=list)

    def add_edge(self, referenced: int, referencing: int) -> None:
        self.dependencies[referencing].append(referenced)
        self.dependents[referenced].append(referencing)


def build_dependency_graph(schema: DatasetSchema) -> DependencyGraph:
    """
    Build the dependency graph for a schema.

    Nullable self references are skipped because the value may be absent.
    Relationships to unknown entities are skipped too; the validator reports
    them separately.
    """
    nodes = list(schema.entities.keys())
    graph = DependencyGraph(
        nodes=nodes,
        index={name: i for i, name in enumerate(nodes)},
        dependencies=[[] for _ in nodes],
        dependents=[[] for _ in nodes],
    )

    for entity_name, entity in schema.entities.items():
        for rel in entity.relationships.values():
            if entity.is_self_reference_exempt(entity_name, rel):
                continue
            if rel.references not in graph.index:
                continue
            graph.add_edge(graph.index[rel.references], graph.index[entity_name])

    return graph


def find_cycles(graph: DependencyGraph) -> List[List[str]]:
    """
    Detect dependency cycles with a depth-first search.

    Each back edge into a node on the current search path is reported as
    the path of entity names forming the cycle, e.g. ``["A", "B", "A"]``.
    The search keeps its own stack, so chain length is not bounded by the
    interpreter's recursion limit. At most one cycle is reported per search
    root.

    Args:
        graph: Dependency graph

    Returns:
        List of cycle paths (empty if the graph is acyclic)
    """
    cycles: List[List[str]] = []
    visited = [False] * len(graph.nodes)
    on_stack = [False] * len(graph.nodes)

    for root in range(len(graph.nodes)):
        if visited[root]:
            continue

        path: List[int] = [root]
        stack: List[Tuple[int, Iterator[int]]] = [(root, iter(graph.dependencies[root]))]
        visited[root] = on_stack[root] = True

        while stack:
            node, neighbors = stack[-1]
            neighbor = next(neighbors, None)

            if neighbor is None:
                stack.pop()
                path.pop()
                on_stack[node] = False
            elif not visited[neighbor]:
                visited[neighbor] = on_stack[neighbor] = True
                path.append(neighbor)
                stack.append((neighbor, iter(graph.dependencies[neighbor])))
            elif on_stack[neighbor]:
                start = path.index(neighbor)
                cycles.append([graph.nodes[i] for i in path[start:] + [neighbor]])
                # The rest of this search is abandoned
                for i in path:
                    on_stack[i] = False
                break

    return cycles


def format_cycle(cycle: List[str]) -> str:
    return " -> ".join(cycle)


def topo_sort_entities(graph: DependencyGraph) -> List[str]:
    """
    Topologically sort entities with Kahn's algorithm.

    Ready nodes are processed first-in first-out, seeded in schema order, so
    the result is stable for a given schema.

    Raises:
        InternalOrderingError: If some entity could not be ordered
    """
    in_degree = [len(deps) for deps in graph.dependencies]
    queue: List[int] = [i for i, degree in enumerate(in_degree) if degree == 0]
    result: List[str] = []

    while queue:
        node = queue.pop(0)
        result.append(graph.nodes[node])

        for dependent in graph.dependents[node]:
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                queue.append(dependent)

    if len(result) < len(graph.nodes):
        remaining = [name for name in graph.nodes if name not in result]
        raise InternalOrderingError(
            f"Generation order is incomplete; unresolved entities: {remaining}"
        )

    return result


def resolve_generation_order(schema: DatasetSchema) -> List[str]:
    """Order in which entities must be generated (referenced before referencing)."""
    graph = build_dependency_graph(schema)
    order = topo_sort_entities(graph)
    logger.debug(f"Resolved generation order: {' -> '.join(order)}")
    return order
