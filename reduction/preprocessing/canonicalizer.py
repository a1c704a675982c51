"""
3-CNF Canonicalizer.

Rewrites an arbitrary-arity CNF formula into one where every clause has
exactly three literals. Three strategies are available:

- split: chain-splitting of long clauses with helper variables, then
  padding of short clauses
- padding: pads short clauses with fresh variables and truncates long
  clauses to their first three literals (lossy, kept for the canned
  teaching examples)
- tseitin: gadget construction; over the flat grammar it produces the
  same clauses as split

Each call records a human-readable trace of the rewrites it applied.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Set, Union
import logging
import re

from .formula_parser import (
    Clause,
    Formula,
    Literal,
    formula_variables,
    render,
)

logger = logging.getLogger(__name__)

_PREFIX = re.compile(r"[A-Za-z0-9]+")


class Strategy(str, Enum):
    SPLIT = 'split'
    PADDING = 'padding'
    TSEITIN = 'tseitin'


@dataclass
class CanonicalizerConfig:
    """
    Naming scheme for variables introduced by the canonicalizer.

    Attributes:
        counter_start: First counter value handed out
        split_prefix: Prefix of helper variables linking split fragments
        unit_pad_prefix: Prefix of the variable padding an arity-1 clause
        binary_pad_prefix: Prefix of the variable padding an arity-2 clause
        padding_prefix: Prefix used by the padding-only strategy
    """
    counter_start: int = 1
    split_prefix: str = 'x'
    unit_pad_prefix: str = 'y'
    binary_pad_prefix: str = 'z'
    padding_prefix: str = 'p'

    def __post_init__(self):
        if self.counter_start < 0:
            raise ValueError(f"counter_start must be non-negative, got {self.counter_start}")
        for name in ('split_prefix', 'unit_pad_prefix', 'binary_pad_prefix', 'padding_prefix'):
            prefix = getattr(self, name)
            # Fresh names must themselves pass validation and parse back
            if not isinstance(prefix, str) or not _PREFIX.fullmatch(prefix):
                raise ValueError(f"{name} must be letters/digits only, got {prefix!r}")

    @classmethod
    def from_dict(cls, cfg: Optional[Mapping[str, Any]]) -> 'CanonicalizerConfig':
        """Build from a plain dict or an OmegaConf DictConfig."""
        if cfg is None:
            return cls()
        defaults = cls()
        return cls(
            counter_start=int(cfg.get('counter_start', defaults.counter_start)),
            split_prefix=cfg.get('split_prefix', defaults.split_prefix),
            unit_pad_prefix=cfg.get('unit_pad_prefix', defaults.unit_pad_prefix),
            binary_pad_prefix=cfg.get('binary_pad_prefix', defaults.binary_pad_prefix),
            padding_prefix=cfg.get('padding_prefix', defaults.padding_prefix),
        )


class FreshVariablePool:
    """
    Supplies variable names that do not clash with a formula's own names.

    A single increasing counter is shared by every prefix, so ``x1`` and
    ``y2`` can both be issued but never ``x1`` and ``y1``. Counter values
    whose name is already taken are skipped.
    """

    def __init__(self, reserved: Iterable[str] = (), start: int = 1):
        self._taken: Set[str] = set(reserved)
        self._counter = start
        self.issued: List[str] = []

    def reserve(self, names: Iterable[str]) -> None:
        """Mark names as unavailable for future fresh variables."""
        self._taken.update(names)

    @property
    def counter(self) -> int:
        return self._counter

    def fresh(self, prefix: str) -> str:
        name = f"{prefix}{self._counter}"
        self._counter += 1
        while name in self._taken:
            name = f"{prefix}{self._counter}"
            self._counter += 1
        self._taken.add(name)
        self.issued.append(name)
        return name


@dataclass
class TransformResult:
    """
    Output of a canonicalization run.

    Attributes:
        formula: The rewritten formula
        steps: Trace of rewrite actions, in order
        strategy: Strategy that produced the formula
        fresh_variables: Names introduced during the run, in order
    """
    formula: Formula
    steps: List[str]
    strategy: Strategy
    fresh_variables: List[str] = field(default_factory=list)


def _describe(clause: Clause) -> str:
    return render([clause])


def split_to_3cnf(
    formula: Formula,
    pool: FreshVariablePool,
    config: CanonicalizerConfig,
    steps: List[str],
) -> Formula:
    """
    Split long clauses with helper variables, then pad short ones.

    A clause (l1 ∨ l2 ∨ ... ∨ lk) with k > 3 becomes
    (l1 ∨ l2 ∨ h1) ∧ (¬h1 ∨ l3 ∨ h2) ∧ ... ∧ (¬h_{k-3} ∨ l_{k-1} ∨ lk).
    Arity-1 clauses gain a fresh variable and its negation, arity-2 clauses
    gain one fresh positive variable.
    """
    steps.append('Identifying clauses that need splitting...')

    result: List[Clause] = []
    for clause in formula:
        if len(clause) <= 3:
            result.append(clause)
            if len(clause) < 3:
                steps.append(
                    f"Clause {_describe(clause)} has {len(clause)} literals - will pad later"
                )
            continue

        steps.append(f"Clause {_describe(clause)} has {len(clause)} literals - splitting...")
        remaining = list(clause)
        while len(remaining) > 3:
            helper = pool.fresh(config.split_prefix)
            new_clause = (remaining[0], remaining[1], Literal(helper))
            result.append(new_clause)
            steps.append(f"Created: {_describe(new_clause)} with helper {helper}")
            remaining = [Literal(helper, True)] + remaining[2:]

        final = tuple(remaining)
        result.append(final)
        steps.append(f"Final part: {_describe(final)}")

    steps.append('Padding short clauses to exactly 3 literals...')
    padded_result: List[Clause] = []
    for clause in result:
        if len(clause) == 1:
            pad = pool.fresh(config.unit_pad_prefix)
            padded = clause + (Literal(pad), Literal(pad, True))
        elif len(clause) == 2:
            pad = pool.fresh(config.binary_pad_prefix)
            padded = clause + (Literal(pad),)
        else:
            padded_result.append(clause)
            continue
        steps.append(f"Padded {_describe(clause)} to {_describe(padded)} using {pad}")
        padded_result.append(padded)

    return tuple(padded_result)


def pad_to_3cnf(
    formula: Formula,
    pool: FreshVariablePool,
    config: CanonicalizerConfig,
    steps: List[str],
) -> Formula:
    """
    Pad short clauses with fresh positive variables.

    Clauses longer than three literals are truncated to their first three.
    The truncation does not preserve satisfiability in general.
    """
    steps.append('Using clause padding method...')

    result: List[Clause] = []
    for clause in formula:
        if len(clause) == 3:
            result.append(clause)
        elif len(clause) < 3:
            steps.append(f"Padding short clause {_describe(clause)}...")
            padded = list(clause)
            while len(padded) < 3:
                pad = pool.fresh(config.padding_prefix)
                padded.append(Literal(pad))
                steps.append(f"Added padding variable {pad}")
            result.append(tuple(padded))
        else:
            logger.warning(
                f"Truncating clause {_describe(clause)} to its first 3 literals; "
                f"{len(clause) - 3} literal(s) dropped"
            )
            steps.append(
                f"Clause {_describe(clause)} is too long - using first 3 literals (simplified)"
            )
            result.append(clause[:3])

    return tuple(result)


StrategyFn = Callable[[Formula, FreshVariablePool, CanonicalizerConfig, List[str]], Formula]

STRATEGIES: Dict[Strategy, StrategyFn] = {
    Strategy.SPLIT: split_to_3cnf,
    Strategy.PADDING: pad_to_3cnf,
    # Flat input cannot express the nested sub-formulas a gadget would name.
    Strategy.TSEITIN: split_to_3cnf,
}


def canonicalize(
    formula: Formula,
    strategy: Union[Strategy, str] = Strategy.SPLIT,
    config: Optional[CanonicalizerConfig] = None,
    pool: Optional[FreshVariablePool] = None,
) -> TransformResult:
    """
    Transform a CNF formula to 3-CNF.

    Args:
        formula: Parsed CNF formula
        strategy: One of 'split', 'padding', 'tseitin'
        config: Fresh-variable naming scheme (defaults if None)
        pool: Fresh-variable pool to draw from; a new one scoped to this
              call is created when None

    Returns:
        TransformResult with the rewritten formula and its trace

    Raises:
        ValueError: If the strategy name is unknown
    """
    try:
        strategy = Strategy(strategy)
    except ValueError as e:
        valid = ', '.join(s.value for s in Strategy)
        raise ValueError(f"Unknown strategy '{strategy}'. Expected one of: {valid}") from e

    config = config or CanonicalizerConfig()
    if pool is None:
        pool = FreshVariablePool(start=config.counter_start)
    pool.reserve(formula_variables(formula))
    first_issued = len(pool.issued)

    steps: List[str] = []
    transformed = STRATEGIES[strategy](formula, pool, config, steps)
    steps.append('Transformation complete! All clauses now have exactly 3 literals.')

    logger.debug(
        f"{strategy.value}: {len(formula)} clauses -> {len(transformed)} clauses, "
        f"{len(pool.issued) - first_issued} fresh variables"
    )

    return TransformResult(
        formula=transformed,
        steps=steps,
        strategy=strategy,
        fresh_variables=pool.issued[first_issued:],
    )
