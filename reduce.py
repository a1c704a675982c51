"""
Run the SAT -> 3-CNF -> CLIQUE reduction on a single formula.

Usage:
    python reduce.py
    python reduce.py formula='(A)∧(B∨C)' strategy=padding
    python reduce.py canonicalizer.split_prefix=h graph.export_pyg=true
"""

import hydra
from omegaconf import DictConfig, OmegaConf
import logging

from reduction.preprocessing import CanonicalizerConfig, clique_graph_to_pyg, render
from reduction.solvers import ReductionReport, solve

logger = logging.getLogger(__name__)


def log_report(report: ReductionReport, show_trace: bool = True) -> None:
    """Log every stage of a reduction report."""
    if not report.validation:
        logger.error(f"Invalid formula: {report.validation.message}")
        return

    logger.info(f"Parsed formula: {render(report.formula)}")

    transform = report.transform
    if show_trace:
        for step in transform.steps:
            logger.info(f"  {step}")
    logger.info(f"3-CNF ({transform.strategy.value}): {render(transform.formula)}")
    if transform.fresh_variables:
        logger.info(f"Fresh variables: {', '.join(transform.fresh_variables)}")

    graph = report.graph
    logger.info(f"Clique graph: {graph.num_vertices} vertices, {graph.num_edges} edges")

    if report.witness is None:
        logger.info("No clique found")
        return

    literals = ', '.join(str(lit) for lit in report.witness.literals())
    logger.info(f"Clique: {', '.join(report.witness.ids())} ({literals})")
    assignment = ', '.join(
        f"{var}={'T' if value else 'F'}" for var, value in report.witness.assignment().items()
    )
    logger.info(f"Satisfying assignment: {assignment}")


@hydra.main(config_path="conf", config_name="config", version_base=None)
def main(cfg: DictConfig):
    """Main entry point."""
    logger.info(f"Configuration:\n{OmegaConf.to_yaml(cfg)}")

    config = CanonicalizerConfig.from_dict(cfg.get('canonicalizer'))
    report = solve(cfg.formula, cfg.get('strategy', 'split'), config=config)

    log_report(report, show_trace=cfg.output.get('show_trace', True))

    if report.graph is not None and cfg.graph.get('export_pyg', False):
        data = clique_graph_to_pyg(report.graph, label=float(report.satisfiable))
        logger.info(f"PyG data: {data}")

    return report


if __name__ == '__main__':
    main()
