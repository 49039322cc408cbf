import random

import pytest

from domino_sets import Tileset, is_valid_solution, sequence_length
from graph import RegularGraph, circuit_to_solution, find_eulerian_circuit


@pytest.mark.parametrize("n", range(2, 10))
def test_every_node_has_even_degree(n):
    graph = RegularGraph(n)
    assert all(graph.degree(node) % 2 == 0 for node in graph.nodes)


@pytest.mark.parametrize("n", range(2, 10))
def test_edges_are_the_tileset(n):
    graph = RegularGraph(n)
    assert graph.edge_count == sequence_length(n)
    assert set(graph.edges()) == {tile.canonical() for tile in Tileset(n)}


@pytest.mark.parametrize("n", range(2, 10))
@pytest.mark.parametrize("randomized", [False, True])
def test_circuit_uses_every_edge_once(n, randomized):
    graph = RegularGraph(n)
    circuit = find_eulerian_circuit(graph, randomized=randomized, rng=random.Random(n))

    assert len(circuit) == sequence_length(n) + 1
    assert circuit[0] == circuit[-1]

    solution = circuit_to_solution(circuit)
    assert is_valid_solution(solution)
    assert {tile.canonical() for tile in solution} == {tile.canonical() for tile in Tileset(n)}


def test_deterministic_circuit_is_stable(solution_n3):
    circuit = find_eulerian_circuit(RegularGraph(3))
    assert circuit == [0, 0, 1, 1, 2, 2, 3, 3, 0]
    assert [t.as_tuple() for t in circuit_to_solution(circuit)] == [t.as_tuple() for t in solution_n3]


def test_seeded_circuits_are_reproducible():
    graph = RegularGraph(6)
    first = find_eulerian_circuit(graph, randomized=True, rng=random.Random(42))
    second = find_eulerian_circuit(graph, randomized=True, rng=random.Random(42))
    assert first == second


def test_empty_graph_has_no_circuit():
    with pytest.raises(ValueError):
        find_eulerian_circuit(RegularGraph(-1))
