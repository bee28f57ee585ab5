from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Set

from .model import Cycle


class ModuleNode:
    """A module file in the dependency graph."""
    def __init__(self, path: str, order: int):
        self.path = path
        self.order = order  # first-seen position, fixes traversal order
        self.depends_on: List[str] = []  # Files this imports
        self.depended_on_by: List[str] = []  # Files that import this


class DependencyGraph:
    """Directed module graph built from a resolver edge map."""
    def __init__(self):
        self.nodes: Dict[str, ModuleNode] = {}

    def add_node(self, path: str) -> ModuleNode:
        """Add a node if not present; return it."""
        node = self.nodes.get(path)
        if node is None:
            node = ModuleNode(path, len(self.nodes))
            self.nodes[path] = node
        return node

    def add_edge(self, source: str, target: str):
        """Add an edge from source to target, ignoring duplicates."""
        src = self.add_node(source)
        dst = self.add_node(target)
        if target not in src.depends_on:
            src.depends_on.append(target)
            dst.depended_on_by.append(source)

    @classmethod
    def from_edge_map(cls, edge_map: Mapping[str, Iterable[str]]) -> DependencyGraph:
        graph = cls()
        for source in edge_map:
            graph.add_node(source)
        for source, targets in edge_map.items():
            # Plain sets have no stable order across runs
            if isinstance(targets, (set, frozenset)):
                targets = sorted(targets)
            for target in targets:
                graph.add_edge(source, target)
        return graph

    def successors(self, path: str) -> List[str]:
        return self.nodes[path].depends_on

    def targets(self) -> Set[str]:
        """Every file that some other file depends on."""
        return {path for path, node in self.nodes.items() if node.depended_on_by}

    def strongly_connected_components(self) -> Dict[str, int]:
        """Map each node to a component id (iterative Tarjan)."""
        index: Dict[str, int] = {}
        low: Dict[str, int] = {}
        component: Dict[str, int] = {}
        stack: List[str] = []
        on_stack: Set[str] = set()
        counter = 0
        next_id = 0

        for root in self.nodes:
            if root in index:
                continue
            index[root] = low[root] = counter
            counter += 1
            stack.append(root)
            on_stack.add(root)
            work = [(root, iter(self.successors(root)))]

            while work:
                current, successors = work[-1]
                descended = False
                for nxt in successors:
                    if nxt not in index:
                        index[nxt] = low[nxt] = counter
                        counter += 1
                        stack.append(nxt)
                        on_stack.add(nxt)
                        work.append((nxt, iter(self.successors(nxt))))
                        descended = True
                        break
                    if nxt in on_stack:
                        low[current] = min(low[current], index[nxt])
                if descended:
                    continue

                work.pop()
                if work:
                    parent = work[-1][0]
                    low[parent] = min(low[parent], low[current])
                if low[current] == index[current]:
                    while True:
                        member = stack.pop()
                        on_stack.discard(member)
                        component[member] = next_id
                        if member == current:
                            break
                    next_id += 1

        return component

    def find_cycles(self) -> List[Cycle]:
        """Enumerate every simple cycle once.

        Each cycle is reported from its earliest node in graph order, so
        rotations are never repeated. Cycles come out ordered by that start
        node, then by depth-first discovery along stored edge order.
        """
        component = self.strongly_connected_components()
        cycles: List[Cycle] = []

        for start, start_node in self.nodes.items():
            floor = start_node.order
            scc = component[start]
            path = [start]
            on_path = {start}
            work = [iter(self.successors(start))]

            while work:
                descended = False
                for nxt in work[-1]:
                    if nxt == start:
                        cycles.append(list(path))
                        continue
                    if (
                        nxt in on_path
                        or component[nxt] != scc
                        or self.nodes[nxt].order < floor
                    ):
                        continue
                    path.append(nxt)
                    on_path.add(nxt)
                    work.append(iter(self.successors(nxt)))
                    descended = True
                    break
                if not descended:
                    work.pop()
                    on_path.discard(path.pop())

        return cycles


def find_cycles(edge_map: Mapping[str, Iterable[str]]) -> List[Cycle]:
    """Every simple dependency cycle in edge_map, self-imports included."""
    return DependencyGraph.from_edge_map(edge_map).find_cycles()


def find_unused(edge_map: Mapping[str, Iterable[str]], inventory: Iterable[str]) -> List[str]:
    """Inventory files that no file in edge_map depends on, in inventory order.

    Entry points are reported too: nothing imports them.
    """
    targets: Set[str] = set()
    for deps in edge_map.values():
        targets.update(deps)
    return [path for path in inventory if path not in targets]
