"""
Solver interfaces for the CLIQUE side of the reduction.

Provides the one-vertex-per-clause clique search and the end-to-end pipeline.
"""

from .clique_solver import (
    CliqueWitness,
    ReductionReport,
    evaluate_formula,
    find_clique,
    solve,
    verify_witness,
)

__all__ = [
    'CliqueWitness',
    'ReductionReport',
    'find_clique',
    'verify_witness',
    'evaluate_formula',
    'solve',
]
