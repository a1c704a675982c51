"""
Run the reduction over a batch of formulas and write a JSON report.

By default the built-in example formulas are used, each with the strategy
it demonstrates. A file with one formula per line can be given instead;
blank lines and lines starting with '#' are skipped.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from reduction.datasets import EXAMPLE_FORMULAS
from reduction.preprocessing import Strategy, render
from reduction.solvers import ReductionReport, solve

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def load_formulas(path: str | Path) -> List[str]:
    """
    Read formulas from a text file, one per line.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Formula file not found: {path}")

    formulas = []
    with open(path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith('#'):
                continue
            formulas.append(line)
    return formulas


def report_to_record(report: ReductionReport) -> Dict[str, Any]:
    """Flatten a reduction report into a JSON-serializable dict."""
    record: Dict[str, Any] = {
        'input': report.text,
        'valid': report.validation.valid,
        'error': report.validation.error.name if report.validation.error else None,
    }
    if not report.validation:
        return record

    record.update({
        'strategy': report.transform.strategy.value,
        'three_cnf': render(report.transform.formula),
        'num_clauses': len(report.transform.formula),
        'num_vertices': report.graph.num_vertices,
        'num_edges': report.graph.num_edges,
        'fresh_variables': report.transform.fresh_variables,
        'clique': report.witness.ids() if report.witness else None,
        'assignment': report.witness.assignment() if report.witness else None,
    })
    return record


def run_examples(
    formulas_file: Optional[str] = None,
    strategy: Optional[str] = None,
    output_file: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Run the reduction on every formula and collect the results.

    Args:
        formulas_file: Optional file of formulas; the built-in examples are
                       used when None
        strategy: Strategy for every formula; for built-in examples the
                  example's own strategy is used when None
        output_file: Optional path for the JSON report

    Returns:
        List of per-formula records
    """
    if formulas_file is not None:
        default = Strategy(strategy or Strategy.SPLIT)
        jobs = [(text, default) for text in load_formulas(formulas_file)]
    else:
        jobs = [(ex.text, Strategy(strategy or ex.strategy)) for ex in EXAMPLE_FORMULAS]

    logger.info(f"Processing {len(jobs)} formulas")

    records = []
    for text, job_strategy in tqdm(jobs, desc="Reducing formulas"):
        report = solve(text, job_strategy)
        records.append(report_to_record(report))

    invalid = sum(1 for r in records if not r['valid'])
    unsat = sum(1 for r in records if r['valid'] and r['clique'] is None)
    logger.info(f"Processed {len(records)} formulas: {invalid} invalid, {unsat} without clique")

    if output_file is not None:
        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(records, f, indent=2, ensure_ascii=False)
        logger.info(f"Report saved to {output_file}")

    return records


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Run the SAT -> CLIQUE reduction on many formulas")
    parser.add_argument("--formulas", default=None, help="File with one formula per line")
    parser.add_argument("--strategy", default=None, choices=[s.value for s in Strategy])
    parser.add_argument("--output", default="outputs/reduction_report.json", help="Output JSON file")

    args = parser.parse_args()

    run_examples(
        formulas_file=args.formulas,
        strategy=args.strategy,
        output_file=args.output,
    )
