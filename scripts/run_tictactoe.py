#!/usr/bin/env python3
"""
Utility script to evolve tic-tac-toe move pickers.

Usage:
    python scripts/run_tictactoe.py
    python scripts/run_tictactoe.py --config configs/config_tictactoe_discrete.ini
    python scripts/run_tictactoe.py --generations 100 --seed 7 --num-jobs 4
    python scripts/run_tictactoe.py --generations 50 --visualize
"""

import argparse
import sys
from pathlib import Path

# Add the source directory to the path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from evobits import Config, Trial
from evobits.network import visualize_network


def main():
    parser = argparse.ArgumentParser(description='Evolve bitwise networks playing one tic-tac-toe turn')
    parser.add_argument('--config', default=None,
                        help='INI configuration file (default: built-in settings)')
    parser.add_argument('--generations', type=int, default=None,
                        help='Stop after this many generations (default: from config, else run forever)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Seed of the random number generator')
    parser.add_argument('--fitness-variant', choices=['discrete', 'continuous'], default=None,
                        help='Override the scoring policy')
    parser.add_argument('--mutation-mode', choices=['online', 'deferred'], default=None,
                        help='Override when mutation happens')
    parser.add_argument('--num-jobs', type=int, default=1,
                        help='Number of parallel jobs for evaluation')
    parser.add_argument('--quiet', action='store_true',
                        help='Do not print per-generation progress')
    parser.add_argument('--visualize', action='store_true',
                        help='Render the best network with graphviz at the end (bounded runs only)')

    args = parser.parse_args()

    config = Config(args.config)
    if args.generations is not None:
        config.max_number_generations = args.generations
    if args.seed is not None:
        config.seed = args.seed
    if args.fitness_variant is not None:
        config.fitness_variant = args.fitness_variant
    if args.mutation_mode is not None:
        config.mutation_mode = args.mutation_mode
    config.validate()

    print(f"Population: {config.population_size}, layers: {config.layer_widths}")
    print(f"Fitness: {config.fitness_variant}, mutation: {config.mutation_mode}")

    trial = Trial(config, suppress_output=args.quiet)
    try:
        trial.run(num_jobs=args.num_jobs)
    except KeyboardInterrupt:
        print("\nInterrupted.")

    if args.visualize and trial.best_individual is not None:
        visualize_network(trial.best_individual.network, view=True, show_masks=False)


if __name__ == '__main__':
    main()
