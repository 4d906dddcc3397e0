"""
Integration tests: full evolutionary runs on the tic-tac-toe task.

These tests run real trials end to end (real networks, real boards, real
scoring) with fixed seeds, as regression smoke tests of the whole loop.
"""

import numpy as np
import pytest

from evobits import Config, Trial
from evobits.fitness.environment import CLAIMED, EMPTY, OCCUPIED
from evobits.fitness.step        import step
from evobits.network             import StaticLayer, InferredLayer, Node, Edge


@pytest.fixture
def discrete_config():
    config = Config()
    config.population_size            = 30
    config.layer_widths               = [9]
    config.evaluations_per_generation = 10
    config.fitness_variant            = 'discrete'
    config.mutation_mode              = 'deferred'
    config.elite_survivors            = 5
    config.elite_tier_sizes           = [10, 5, 5]
    config.elite_tier_rarities        = [8, 32, 128]
    config.max_number_generations     = 30
    config.seed                       = 2024
    config.validate()
    return config


class TestEvolution:
    """End-to-end runs."""

    def test_best_score_does_not_decrease(self, discrete_config):
        """Elitist copying keeps the best score from drifting down over generations."""
        trial = Trial(discrete_config, suppress_output=True)

        trial.run()

        best = [stats['best_score'] for stats in trial.history]
        assert np.mean(best[-10:]) >= np.mean(best[:5])
        assert max(best[-10:]) >= best[0]

    def test_best_beats_population_mean(self, discrete_config):
        trial = Trial(discrete_config, suppress_output=True)

        trial.run()

        for stats in trial.history:
            assert stats['best_score'] >= stats['mean_score']

    def test_default_setup_runs(self):
        """Default settings (continuous scoring, online mutation), scaled down."""
        config = Config()
        config.population_size            = 40
        config.evaluations_per_generation = 5
        config.max_number_generations     = 2
        config.seed                       = 1
        config.validate()
        trial = Trial(config, suppress_output=True)

        trial.run()

        assert len(trial.history) == 2
        assert len(trial.best_individual.get_values()) == 9


class TestHandBuiltPlayer:
    """A network wired by hand to always play the last cell."""

    def make_player(self, input_layer):
        # Output i is the constant (0 & 0) ^ xor = xor, XOR-ed over 9 edges.
        nodes = []
        for i in range(9):
            constant = 1 if i == 8 else 0
            edges = [Edge(j, 0x00, constant if j == 0 else 0x00) for j in range(9)]
            nodes.append(Node(edges))
        return InferredLayer(nodes, input_layer)

    def test_always_commits_on_generated_boards(self, discrete_config):
        input_layer = StaticLayer(np.zeros(9, dtype=np.uint8))
        player = self.make_player(input_layer)
        rng = np.random.default_rng(0)

        from evobits.fitness.environment import random_environment
        for _ in range(20):
            env = random_environment(9, rng)
            input_layer.load(env)
            score = step(input_layer.get_values(), player.get_values(), env, discrete_config, rng)

            assert env[8] == CLAIMED
            assert set(env[:8].tolist()) <= {EMPTY, OCCUPIED}
            assert score >= 8 * discrete_config.zero_bonus + discrete_config.select_bonus + discrete_config.commit_bonus
