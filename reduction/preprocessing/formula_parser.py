"""
Formula Parser for CNF surface syntax.

This module parses Boolean formulas written as an AND of parenthesized ORs,
e.g. ``(A ∨ B) ∧ (¬C ∨ D ∨ E ∨ F)``, into a structured formula, validates
the raw text, and renders formulas back to the same syntax.

The grammar is flat: parentheses only delimit clauses, they never nest
sub-formulas.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple
import logging
import re

logger = logging.getLogger(__name__)

AND = '∧'
OR = '∨'
NOT = '¬'
CONNECTIVES = frozenset((AND, OR, NOT))

_VALID_CHARS = re.compile(r'^[A-Za-z0-9∨∧¬()\s]+$')
_WHITESPACE = re.compile(r'\s+')


@dataclass(frozen=True)
class Literal:
    """
    A variable occurrence with a polarity.

    Attributes:
        variable: Variable name (letters/digits, case-sensitive)
        negated: True if the literal is the negation of the variable
    """
    variable: str
    negated: bool = False

    def complement(self) -> 'Literal':
        """Return the literal of the same variable with opposite polarity."""
        return Literal(self.variable, not self.negated)

    def is_complementary(self, other: 'Literal') -> bool:
        return self.variable == other.variable and self.negated != other.negated

    def __str__(self) -> str:
        return (NOT if self.negated else '') + self.variable


# A clause is a disjunction of literals, a formula a conjunction of clauses.
Clause = Tuple[Literal, ...]
Formula = Tuple[Clause, ...]


class ValidationError(Enum):
    """Reasons a formula string can be rejected, with user-facing messages."""
    EMPTY_INPUT = 'Formula cannot be empty'
    UNBALANCED_PARENS = 'Unbalanced parentheses'
    INVALID_CHARACTER = 'Invalid characters. Use: letters, ∨, ∧, ¬, parentheses'
    CONSECUTIVE_OPERATORS = 'Consecutive operators not allowed'

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating a formula string.

    Attributes:
        valid: True if every syntax check passed
        error: The first failing check, or None when valid
    """
    valid: bool
    error: Optional[ValidationError] = None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error is not None else None

    def __bool__(self) -> bool:
        return self.valid


def _failure(error: ValidationError) -> ValidationResult:
    logger.debug(f"Formula rejected: {error.name}")
    return ValidationResult(valid=False, error=error)


def validate(text: str) -> ValidationResult:
    """
    Check the surface syntax of a formula string.

    Checks run in order and the first failure is reported:
    1. Non-empty after trimming
    2. Balanced parentheses (depth never negative, ends at zero)
    3. Only letters, digits, connectives, parentheses and whitespace
    4. No two connectives in a row (a NOT right after AND/OR is a literal
       prefix and is allowed)
    5. NOT only at the start of a literal; ``A¬B`` is reported as an
       invalid character

    Args:
        text: Raw formula text

    Returns:
        ValidationResult describing success or the failing check
    """
    if not text.strip():
        return _failure(ValidationError.EMPTY_INPUT)

    depth = 0
    for char in text:
        if char == '(':
            depth += 1
        elif char == ')':
            depth -= 1
        if depth < 0:
            return _failure(ValidationError.UNBALANCED_PARENS)
    if depth != 0:
        return _failure(ValidationError.UNBALANCED_PARENS)

    if not _VALID_CHARS.match(text):
        return _failure(ValidationError.INVALID_CHARACTER)

    compact = _WHITESPACE.sub('', text)
    for prev, char in zip(compact, compact[1:]):
        if prev in CONNECTIVES and char in CONNECTIVES:
            if char == NOT and prev != NOT:
                continue
            return _failure(ValidationError.CONSECUTIVE_OPERATORS)

    # NOT may only open a literal
    for prev, char in zip(compact, compact[1:]):
        if char == NOT and prev not in (AND, OR, '('):
            return _failure(ValidationError.INVALID_CHARACTER)

    return ValidationResult(valid=True)


def _parse_literal(token: str) -> Optional[Literal]:
    negated = token.startswith(NOT)
    variable = token[1:] if negated else token
    if not variable:
        return None
    return Literal(variable, negated)


def parse(text: str) -> Formula:
    """
    Parse a formula string into a structured CNF formula.

    Assumes the text passed ``validate``. Whitespace is removed, the text is
    split on AND into clauses, parentheses are stripped from each clause and
    the remainder is split on OR into literals. Empty literal tokens are
    skipped and clauses without literals are dropped.

    Args:
        text: Formula text in surface syntax

    Returns:
        Formula as a tuple of clauses
    """
    compact = _WHITESPACE.sub('', text)

    clauses: List[Clause] = []
    for clause_str in compact.split(AND):
        cleaned = clause_str.replace('(', '').replace(')', '')
        literals = []
        for token in cleaned.split(OR):
            if not token:
                continue
            literal = _parse_literal(token)
            if literal is not None:
                literals.append(literal)
        if literals:
            clauses.append(tuple(literals))

    return tuple(clauses)


def parse_formula_checked(text: str) -> Tuple[Optional[Formula], ValidationResult]:
    """
    Validate and parse in one step.

    Returns:
        Tuple of (formula or None, validation result)
    """
    result = validate(text)
    if not result:
        return None, result
    return parse(text), result


def render_clause(clause: Iterable[Literal]) -> str:
    return '(' + f' {OR} '.join(str(lit) for lit in clause) + ')'


def render(formula: Iterable[Iterable[Literal]]) -> str:
    """
    Render a formula back to surface syntax.

    Every clause is parenthesized, literals are joined by OR and clauses by
    AND. ``parse(render(f)) == f`` for every formula built by this package.
    """
    return f' {AND} '.join(render_clause(clause) for clause in formula)


def make_formula(clauses: Iterable[Iterable[Literal]]) -> Formula:
    """Freeze any nested iterable of literals into a Formula."""
    return tuple(tuple(clause) for clause in clauses)


def formula_variables(formula: Formula) -> List[str]:
    """Return distinct variable names in order of first occurrence."""
    seen: Dict[str, None] = {}
    for clause in formula:
        for literal in clause:
            seen.setdefault(literal.variable, None)
    return list(seen)


def is_three_cnf(formula: Formula) -> bool:
    """True if every clause has exactly three literals."""
    return all(len(clause) == 3 for clause in formula)
