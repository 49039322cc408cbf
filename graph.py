"""
Regular graphs over pip values and Eulerian circuits through them.

A closed walk that uses every edge of RegularGraph(n) exactly once, read as
consecutive node pairs, is a complete domino loop of order n.
"""
import random
from typing import Dict, List, Optional, Set, Tuple

from domino_sets import Solution, Tile, is_antipodal


class RegularGraph:
    """
    Undirected graph on nodes 0..n with a self loop on every node.

    Even n gives the complete graph; odd n leaves out each node's antipodal
    partner so that every degree stays even.
    """

    def __init__(self, n: int):
        self.n = n
        self.nodes: List[int] = list(range(n + 1))
        self.adjacency: Dict[int, List[int]] = {
            source: [
                destination for destination in self.nodes
                if not is_antipodal(source, destination, n)
            ]
            for source in self.nodes
        }

    def degree(self, node: int) -> int:
        """Degree of a node; a self loop counts twice."""
        neighbours = self.adjacency[node]
        return len(neighbours) + (1 if node in neighbours else 0)

    def edges(self) -> List[Tuple[int, int]]:
        """Each undirected edge once, as (low, high)."""
        return [
            (source, destination)
            for source in self.nodes
            for destination in self.adjacency[source]
            if source <= destination
        ]

    @property
    def edge_count(self) -> int:
        return len(self.edges())

    def __len__(self):
        return len(self.nodes)

    def __repr__(self):
        return f"RegularGraph(n={self.n}, {self.edge_count} edges)"


def find_eulerian_circuit(
    graph: RegularGraph,
    randomized: bool = False,
    rng: Optional[random.Random] = None,
) -> List[int]:
    """
    Hierholzer's algorithm with an explicit stack.

    Returns edge_count + 1 nodes; first and last node coincide. With
    `randomized`, the start node and each outgoing edge are drawn from `rng`.
    """
    if not graph.nodes:
        raise ValueError("Cannot find an Eulerian circuit in an empty graph")
    if randomized and rng is None:
        rng = random.Random()

    visited: Set[Tuple[int, int]] = set()
    circuit: List[int] = []
    start = rng.choice(graph.nodes) if randomized else graph.nodes[0]
    stack: List[int] = [start]

    while stack:
        current = stack[-1]
        candidates = [
            neighbour for neighbour in graph.adjacency[current]
            if (current, neighbour) not in visited
        ]
        if candidates:
            nxt = rng.choice(candidates) if randomized else candidates[0]
            visited.add((current, nxt))
            if nxt != current:
                visited.add((nxt, current))
            stack.append(nxt)
        else:
            circuit.append(stack.pop())

    circuit.reverse()
    return circuit


def circuit_to_solution(circuit: List[int]) -> Solution:
    """Pair consecutive circuit nodes into tiles."""
    return [Tile(a, b) for a, b in zip(circuit, circuit[1:])]


if __name__ == "__main__":
    for order in range(2, 7):
        g = RegularGraph(order)
        cycle = find_eulerian_circuit(g)
        print(g, "->", circuit_to_solution(cycle))
