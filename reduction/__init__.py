"""
SAT -> 3-CNF -> CLIQUE reduction engine.

This package parses CNF formulas, rewrites them into 3-CNF, lowers them to
the compatibility graph used by the CLIQUE reduction and searches that
graph for a clique certifying satisfiability.

Submodules:
- preprocessing: formula parsing, 3-CNF canonicalization, graph building
- solvers: clique search and the end-to-end pipeline
- datasets: canned example formulas
"""

from .preprocessing import (
    Literal,
    Formula,
    validate,
    parse,
    render,
    canonicalize,
    Strategy,
    CanonicalizerConfig,
    lower,
    CliqueGraph,
)
from .solvers import find_clique, solve, CliqueWitness, ReductionReport
from .datasets import EXAMPLE_FORMULAS, get_example

__version__ = '0.1.0'

__all__ = [
    # Formula model and parsing
    'Literal',
    'Formula',
    'validate',
    'parse',
    'render',
    # Canonicalization
    'canonicalize',
    'Strategy',
    'CanonicalizerConfig',
    # Graph building and search
    'lower',
    'CliqueGraph',
    'find_clique',
    'CliqueWitness',
    'solve',
    'ReductionReport',
    # Examples
    'EXAMPLE_FORMULAS',
    'get_example',
]
