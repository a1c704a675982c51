"""
Preprocessing utilities for CNF formulas.

Provides:
- Formula parsing, validation and rendering (flat CNF surface syntax)
- 3-CNF canonicalization (split, padding, tseitin)
- Clique graph construction
"""

from .formula_parser import (
    AND,
    NOT,
    OR,
    Clause,
    Formula,
    Literal,
    ValidationError,
    ValidationResult,
    formula_variables,
    is_three_cnf,
    make_formula,
    parse,
    parse_formula_checked,
    render,
    validate,
)
from .canonicalizer import (
    STRATEGIES,
    CanonicalizerConfig,
    FreshVariablePool,
    Strategy,
    TransformResult,
    canonicalize,
    pad_to_3cnf,
    split_to_3cnf,
)
from .graph_builder import (
    CliqueGraph,
    Vertex,
    clique_graph_to_pyg,
    formula_to_clique_data,
    lower,
)

__all__ = [
    # Formula parsing
    'AND',
    'OR',
    'NOT',
    'Literal',
    'Clause',
    'Formula',
    'ValidationError',
    'ValidationResult',
    'validate',
    'parse',
    'parse_formula_checked',
    'render',
    'make_formula',
    'formula_variables',
    'is_three_cnf',
    # Canonicalization
    'Strategy',
    'STRATEGIES',
    'CanonicalizerConfig',
    'FreshVariablePool',
    'TransformResult',
    'canonicalize',
    'split_to_3cnf',
    'pad_to_3cnf',
    # Graph building
    'Vertex',
    'CliqueGraph',
    'lower',
    'clique_graph_to_pyg',
    'formula_to_clique_data',
]
