"""
Clique Search over the compatibility graph.

Finds one vertex per clause such that all chosen vertices are pairwise
adjacent. Such a clique is a certificate that the formula is satisfiable:
setting every chosen literal true satisfies every clause, and no two chosen
literals are complementary.
"""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union
import logging

from ..preprocessing.canonicalizer import (
    CanonicalizerConfig,
    Strategy,
    TransformResult,
    canonicalize,
)
from ..preprocessing.formula_parser import (
    Formula,
    Literal,
    ValidationResult,
    parse,
    validate,
)
from ..preprocessing.graph_builder import CliqueGraph, Vertex, lower

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CliqueWitness:
    """
    A clique selecting exactly one vertex per clause.

    Attributes:
        indices: Vertex indices into the graph, in clause order
        vertices: The selected vertices, in clause order
    """
    indices: Tuple[int, ...]
    vertices: Tuple[Vertex, ...]

    def literals(self) -> List[Literal]:
        return [v.literal for v in self.vertices]

    def ids(self) -> List[str]:
        return [v.id for v in self.vertices]

    def assignment(self) -> Dict[str, bool]:
        """
        Truth assignment making every selected literal true.

        Variables that are not selected are left out.
        """
        return {lit.variable: not lit.negated for lit in self.literals()}


def find_clique(
    graph: CliqueGraph,
    partition: Optional[Sequence[Sequence[int]]] = None,
) -> Optional[CliqueWitness]:
    """
    Search for a clique with one vertex from each clause.

    Depth-first backtracking over clauses in order: for each clause, its
    vertices are tried in position order, and a candidate is rejected as
    soon as it misses an edge to any vertex already chosen. The first
    complete selection is returned, so the result is deterministic.

    The search keeps an explicit cursor per clause instead of recursing, so
    formulas with thousands of clauses are handled.

    Args:
        graph: Compatibility graph from ``lower``
        partition: Vertex indices grouped by clause; defaults to
                   ``graph.clause_groups()``

    Returns:
        CliqueWitness, or None if no such clique exists
    """
    groups = [list(g) for g in (partition if partition is not None else graph.clause_groups())]
    chosen: List[int] = []
    # cursors[d] is the next candidate position to try in groups[d]
    cursors = [0] * len(groups)

    depth = 0
    while 0 <= depth < len(groups):
        group = groups[depth]
        placed = False
        while cursors[depth] < len(group):
            candidate = group[cursors[depth]]
            cursors[depth] += 1
            if all(graph.has_edge(candidate, prev) for prev in chosen):
                chosen.append(candidate)
                placed = True
                break

        if placed:
            depth += 1
            if depth < len(groups):
                cursors[depth] = 0
        else:
            # exhausted: backtrack and resume the previous clause's cursor
            cursors[depth] = 0
            depth -= 1
            if depth >= 0:
                chosen.pop()

    if depth < 0:
        logger.debug(f"No clique found across {len(groups)} clauses")
        return None

    return CliqueWitness(
        indices=tuple(chosen),
        vertices=tuple(graph.vertices[i] for i in chosen),
    )


def verify_witness(graph: CliqueGraph, witness: CliqueWitness) -> bool:
    """
    Check that a witness picks one vertex per clause and is a clique.
    """
    clause_indices = [graph.vertices[i].clause_index for i in witness.indices]
    if sorted(clause_indices) != list(range(graph.num_clauses)):
        return False

    indices = witness.indices
    for a in range(len(indices)):
        for b in range(a + 1, len(indices)):
            if not graph.has_edge(indices[a], indices[b]):
                return False
    return True


def evaluate_formula(formula: Formula, assignment: Mapping[str, bool]) -> bool:
    """
    Evaluate a CNF formula under an assignment.

    Variables missing from the assignment are treated as false.
    """
    return all(
        any(assignment.get(lit.variable, False) != lit.negated for lit in clause)
        for clause in formula
    )


@dataclass
class ReductionReport:
    """
    Result of running the whole SAT -> 3-CNF -> CLIQUE pipeline.

    Attributes:
        text: Input formula text
        validation: Outcome of syntax validation
        formula: Parsed formula (None if validation failed)
        transform: 3-CNF transformation result (None if validation failed)
        graph: Compatibility graph of the 3-CNF formula
        witness: Clique found, or None
    """
    text: str
    validation: ValidationResult
    formula: Optional[Formula] = None
    transform: Optional[TransformResult] = None
    graph: Optional[CliqueGraph] = None
    witness: Optional[CliqueWitness] = None

    @property
    def satisfiable(self) -> bool:
        return self.witness is not None


def solve(
    text: str,
    strategy: Union[Strategy, str] = Strategy.SPLIT,
    config: Optional[CanonicalizerConfig] = None,
) -> ReductionReport:
    """
    Validate, parse, canonicalize, lower and search a formula string.

    Invalid input is reported through ``ReductionReport.validation`` rather
    than raised.

    Args:
        text: Formula in surface syntax
        strategy: Canonicalization strategy name
        config: Fresh-variable naming scheme

    Returns:
        ReductionReport with every intermediate result
    """
    validation = validate(text)
    if not validation:
        logger.info(f"Invalid formula {text!r}: {validation.message}")
        return ReductionReport(text=text, validation=validation)

    formula = parse(text)
    transform = canonicalize(formula, strategy, config=config)
    graph = lower(transform.formula)
    witness = find_clique(graph)

    if witness is None:
        logger.warning(f"No clique found for {text!r} ({transform.strategy.value})")
    else:
        logger.info(
            f"Found clique {', '.join(witness.ids())} for {text!r} "
            f"({graph.num_vertices} vertices, {graph.num_edges} edges)"
        )

    return ReductionReport(
        text=text,
        validation=validation,
        formula=formula,
        transform=transform,
        graph=graph,
        witness=witness,
    )
