"""
Example formulas for the SAT -> 3-CNF -> CLIQUE walkthrough.
"""

from .examples import EXAMPLE_FORMULAS, ExampleFormula, get_example, list_examples

__all__ = [
    'EXAMPLE_FORMULAS',
    'ExampleFormula',
    'get_example',
    'list_examples',
]
