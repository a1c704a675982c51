"""
Graph Builder for the 3-CNF to CLIQUE reduction.

This module lowers a formula into its compatibility graph:
1. One vertex per literal occurrence, keyed by (clause index, position)
2. An edge between every two vertices of different clauses whose literals
   are not complementary

A formula with k clauses is satisfiable iff this graph has a k-clique
that uses one vertex from each clause.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple
import logging

import torch
from torch_geometric.data import Data

from .formula_parser import Formula, Literal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Vertex:
    """
    A literal occurrence in the formula.

    Attributes:
        clause_index: Index of the clause the literal belongs to
        position: Position of the literal within its clause
        literal: The literal itself
    """
    clause_index: int
    position: int
    literal: Literal

    @property
    def id(self) -> str:
        return f"c{self.clause_index}-l{self.position}"


@dataclass
class CliqueGraph:
    """
    Compatibility graph of a CNF formula.

    Attributes:
        vertices: Vertices ordered by clause, then position
        edges: Undirected edges as (i, j) vertex-index pairs with i < j,
               in scan order
        num_clauses: Number of clauses in the source formula
    """
    vertices: List[Vertex]
    edges: List[Tuple[int, int]]
    num_clauses: int
    _adjacency: Dict[int, Set[int]] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        adjacency = {i: set() for i in range(len(self.vertices))}
        for u, v in self.edges:
            adjacency[u].add(v)
            adjacency[v].add(u)
        self._adjacency = adjacency

    @property
    def num_vertices(self) -> int:
        return len(self.vertices)

    @property
    def num_edges(self) -> int:
        return len(self.edges)

    def has_edge(self, u: int, v: int) -> bool:
        return v in self._adjacency.get(u, ())

    def neighbors(self, v: int) -> List[int]:
        return sorted(self._adjacency[v])

    def clause_groups(self) -> List[List[int]]:
        """Return vertex indices partitioned by clause, in clause order."""
        groups: List[List[int]] = [[] for _ in range(self.num_clauses)]
        for idx, vertex in enumerate(self.vertices):
            groups[vertex.clause_index].append(idx)
        return groups

    def vertex_id(self, v: int) -> str:
        return self.vertices[v].id


def lower(formula: Formula) -> CliqueGraph:
    """
    Build the compatibility graph of a formula.

    Scans every unordered pair of literal occurrences; pairs from the same
    clause are never joined, pairs from different clauses are joined unless
    the literals are complementary.

    Args:
        formula: CNF formula (normally 3-CNF)

    Returns:
        CliqueGraph with one vertex per literal occurrence
    """
    vertices = [
        Vertex(clause_idx, position, literal)
        for clause_idx, clause in enumerate(formula)
        for position, literal in enumerate(clause)
    ]

    edges = []
    for i, v1 in enumerate(vertices):
        for j in range(i + 1, len(vertices)):
            v2 = vertices[j]
            if v1.clause_index == v2.clause_index:
                continue
            if not v1.literal.is_complementary(v2.literal):
                edges.append((i, j))

    logger.debug(
        f"Lowered {len(formula)} clauses to {len(vertices)} vertices, {len(edges)} edges"
    )

    return CliqueGraph(vertices=vertices, edges=edges, num_clauses=len(formula))


def clique_graph_to_pyg(graph: CliqueGraph, label: Optional[float] = None) -> Data:
    """
    Convert a clique graph to a PyTorch Geometric Data object.

    Node features are one-hot over the clause index. Edges are stored in
    both directions.

    Args:
        graph: CliqueGraph object
        label: Optional graph-level label (e.g. 1.0 for satisfiable)

    Returns:
        PyTorch Geometric Data object
    """
    num_nodes = graph.num_vertices
    num_clauses = graph.num_clauses

    clause_index = torch.tensor(
        [v.clause_index for v in graph.vertices], dtype=torch.long
    )
    negated = torch.tensor(
        [v.literal.negated for v in graph.vertices], dtype=torch.bool
    )

    x = torch.zeros(num_nodes, max(num_clauses, 1))
    if num_nodes:
        x[torch.arange(num_nodes), clause_index] = 1.0

    if graph.edges:
        src = [u for u, _ in graph.edges]
        dst = [v for _, v in graph.edges]
        edge_index = torch.tensor([src + dst, dst + src], dtype=torch.long)
    else:
        edge_index = torch.zeros((2, 0), dtype=torch.long)

    data = Data(
        x=x,
        edge_index=edge_index,
        clause_index=clause_index,
        negated=negated,
        num_nodes=num_nodes,
        num_clauses=num_clauses,
    )

    # Python lists are carried through unchanged by PyG
    data.vertex_ids = [v.id for v in graph.vertices]
    data.variables = [v.literal.variable for v in graph.vertices]

    if label is not None:
        data.y = torch.tensor([label], dtype=torch.float)

    return data


def formula_to_clique_data(formula: Formula, label: Optional[float] = None) -> Data:
    """
    Convenience function to lower a formula directly to PyG Data.

    Args:
        formula: CNF formula
        label: Optional graph-level label

    Returns:
        PyTorch Geometric Data object
    """
    return clique_graph_to_pyg(lower(formula), label)
