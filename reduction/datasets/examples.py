"""
Canned example formulas.

These are the inputs the reduction walkthrough is built around: formulas
that exercise splitting, padding and the clique search on small graphs.
"""

from dataclasses import dataclass
from typing import Dict, List

from ..preprocessing.canonicalizer import Strategy


@dataclass(frozen=True)
class ExampleFormula:
    """
    A named example input.

    Attributes:
        name: Short identifier
        text: Formula in surface syntax
        strategy: Strategy the example is meant to demonstrate
        description: One-line explanation
    """
    name: str
    text: str
    strategy: Strategy
    description: str = ''


EXAMPLE_FORMULAS: List[ExampleFormula] = [
    ExampleFormula(
        name='split_long_clause',
        text='(A ∨ B) ∧ (¬C ∨ D ∨ E ∨ F)',
        strategy=Strategy.SPLIT,
        description='A 4-literal clause is split with one helper variable.',
    ),
    ExampleFormula(
        name='pad_short_clauses',
        text='(A) ∧ (B ∨ C) ∧ (D ∨ E ∨ F)',
        strategy=Strategy.SPLIT,
        description='Unit and binary clauses are padded to three literals.',
    ),
    ExampleFormula(
        name='padding_only',
        text='(A) ∧ (B ∨ C)',
        strategy=Strategy.PADDING,
        description='Short clauses padded with fresh positive variables.',
    ),
    ExampleFormula(
        name='mixed_arity',
        text='(A ∨ B) ∧ (¬C ∨ D ∨ E)',
        strategy=Strategy.SPLIT,
        description='One binary clause padded, one 3-clause kept.',
    ),
    ExampleFormula(
        name='long_and_binary',
        text='(A ∨ B ∨ C ∨ D) ∧ (¬E ∨ F)',
        strategy=Strategy.TSEITIN,
        description='Gadget construction on a 4-literal clause.',
    ),
    ExampleFormula(
        name='clique_demo',
        text='(A ∨ B ∨ C) ∧ (¬A ∨ ¬B ∨ D) ∧ (¬C ∨ D ∨ E)',
        strategy=Strategy.SPLIT,
        description='Already in 3-CNF; the clique graph has 9 vertices.',
    ),
    ExampleFormula(
        name='clique_linked',
        text='(A ∨ B ∨ X) ∧ (¬C ∨ D ∨ Y) ∧ (¬Y ∨ E ∨ F)',
        strategy=Strategy.SPLIT,
        description='Clauses linked through Y and its negation.',
    ),
]

_BY_NAME: Dict[str, ExampleFormula] = {ex.name: ex for ex in EXAMPLE_FORMULAS}


def get_example(name: str) -> ExampleFormula:
    """
    Look up an example by name.

    Raises:
        KeyError: If no example has that name
    """
    try:
        return _BY_NAME[name]
    except KeyError:
        raise KeyError(
            f"Unknown example '{name}'. Available: {', '.join(_BY_NAME)}"
        ) from None


def list_examples() -> List[str]:
    return list(_BY_NAME)
