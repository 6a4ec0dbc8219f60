#!/bin/python
"""
Entry point for running the metaheuristics on knapsack instance files.

Each file may hold several instances separated by a `---` line. The selected
algorithm is run on every instance and the value found is reported next to
the known optimum.
"""
import argparse
import logging
import sys
from pathlib import Path

import numpy as np

from Core.errors import AlgorithmError, ConfigurationError
from Core.problem import ProblemError
from Core.utils import plot_convergence, setup_logging
from GA import GeneticAlgorithm, GeneticAlgorithmConfig
from Knapsack import KnapsackProblem, KnapsackSolution
from SA import SimulatedAnnealingAlgorithm, SimulatedAnnealingConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run local-search metaheuristics on knapsack problem instances."
    )
    parser.add_argument(
        "--seed",
        "-s",
        type=int,
        default=654321,
        help="Random seed for reproducibility (default: 654321)"
    )
    parser.add_argument(
        "--stop-threshold",
        type=float,
        default=None,
        help="Stop once the best objective reaches this value (default: disabled)"
    )
    parser.add_argument(
        "--plot-dir",
        type=str,
        default=None,
        help="Directory where convergence plots are saved (default: no plots)"
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs)"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log per-iteration progress"
    )

    subparsers = parser.add_subparsers(dest="algorithm", required=True)

    ga_defaults = GeneticAlgorithmConfig.default()
    ga = subparsers.add_parser("ga", help="Genetic algorithm")
    ga.add_argument("files", nargs="+", type=Path, help="Knapsack instance files")
    ga.add_argument(
        "--generations",
        "-g",
        type=int,
        default=ga_defaults.number_generations,
        help=f"Number of generations (default: {ga_defaults.number_generations})"
    )
    ga.add_argument(
        "--population",
        "-p",
        type=int,
        default=ga_defaults.population_size,
        help=f"Population size (default: {ga_defaults.population_size})"
    )
    ga.add_argument(
        "--mutation-rate",
        type=float,
        default=ga_defaults.mutation_rate,
        help=f"Mutation rate (default: {ga_defaults.mutation_rate})"
    )
    ga.add_argument(
        "--pairs-parents",
        type=int,
        default=ga_defaults.number_pairs_parents,
        help=f"Pairs of parents mated per generation (default: {ga_defaults.number_pairs_parents})"
    )

    sa_defaults = SimulatedAnnealingConfig.default()
    sa = subparsers.add_parser("sa", help="Simulated annealing")
    sa.add_argument("files", nargs="+", type=Path, help="Knapsack instance files")
    sa.add_argument(
        "--iterations",
        "-i",
        type=int,
        default=sa_defaults.max_iterations,
        help=f"Maximum number of iterations (default: {sa_defaults.max_iterations})"
    )
    sa.add_argument(
        "--initial-temperature",
        type=float,
        default=sa_defaults.initial_temperature,
        help=f"Initial temperature (default: {sa_defaults.initial_temperature})"
    )
    sa.add_argument(
        "--minimal-temperature",
        type=float,
        default=sa_defaults.minimal_temperature,
        help=f"Temperature floor (default: {sa_defaults.minimal_temperature})"
    )
    sa.add_argument(
        "--cooling-rate",
        type=float,
        default=sa_defaults.cooling_rate,
        help=f"Geometric cooling rate (default: {sa_defaults.cooling_rate})"
    )
    return parser


def build_config(args: argparse.Namespace):
    """Builds the validated configuration of the selected algorithm."""
    # Convergence curves are only kept when they get plotted
    record_history = args.plot_dir is not None
    if args.algorithm == "ga":
        return GeneticAlgorithmConfig(
            number_generations=args.generations,
            population_size=args.population,
            mutation_rate=args.mutation_rate,
            number_pairs_parents=args.pairs_parents,
            stop_threshold=args.stop_threshold,
            record_history=record_history,
        )
    return SimulatedAnnealingConfig(
        max_iterations=args.iterations,
        initial_temperature=args.initial_temperature,
        minimal_temperature=args.minimal_temperature,
        cooling_rate=args.cooling_rate,
        stop_threshold=args.stop_threshold,
        record_history=record_history,
    )


def run_instance(config, problem: KnapsackProblem, rng: np.random.Generator):
    """Runs the configured algorithm on one instance and returns its result."""
    if isinstance(config, GeneticAlgorithmConfig):
        initial_population = [
            KnapsackSolution.new_random(None, problem, rng) for _ in range(config.population_size)
        ]
        return GeneticAlgorithm(config).execute(initial_population, rng)
    return SimulatedAnnealingAlgorithm(config).execute(KnapsackSolution([], problem), rng)


def main(argv=None) -> int:
    """Parse command line arguments and run the selected algorithm."""
    args = build_parser().parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.INFO
    logger = setup_logging(args.algorithm, "knapsack", log_dir=args.log_dir, level=level,
                           attach_to=("GA", "SA"))

    try:
        config = build_config(args)
    except ConfigurationError as exc:
        logger.error(str(exc))
        return 2

    rng = np.random.default_rng(args.seed)
    exit_code = 0
    for file_path in args.files:
        try:
            problems = KnapsackProblem.load_from_file(file_path)
        except (OSError, ProblemError) as exc:
            logger.error(f"Could not load {file_path}: {exc}")
            exit_code = 1
            continue

        for index, problem in enumerate(problems):
            label = f"{file_path.name}[{index}]"
            try:
                result = run_instance(config, problem, rng)
            except AlgorithmError as exc:
                logger.error(f"{label}: {exc}")
                exit_code = 1
                continue

            solution = result.solution
            logger.info(
                f"{label}: value {solution.value} (optimal {problem.optimal_value}), "
                f"weight {solution.weight}/{problem.max_weight}, items {sorted(solution.items)}, "
                f"runtime {result.runtime:.3f}s"
            )
            if args.plot_dir is not None:
                plot_convergence(
                    result.history,
                    title=f"{args.algorithm.upper()} - {label}",
                    output_path=Path(args.plot_dir) / f"{args.algorithm}_{file_path.stem}_{index}.png",
                    xlabel="Generation" if args.algorithm == "ga" else "Iteration",
                )
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
