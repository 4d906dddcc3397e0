"""
Unit tests for evobits.pool.population module.

This module contains tests for the Population class: initialization,
ranking, and elitist reproduction.
"""

import pytest
import numpy as np
from unittest.mock import patch

from evobits.network.layers  import InferredLayer, StaticLayer
from evobits.pool.individual import Individual
from evobits.pool.population import Population


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def input_layer():
    return StaticLayer([2, 0, 2, 0, 0, 0, 2, 0, 0])


@pytest.fixture
def population(small_config, input_layer, rng):
    return Population(small_config, input_layer, rng)


def assign_scores(population):
    """Give individual i the score i, so the ranking reverses the list."""
    for i, individual in enumerate(population.individuals):
        individual.score = i


# ============================================================================
# Test Population Initialization
# ============================================================================

class TestPopulationInit:
    """Test Population.__init__ method."""

    def test_init_creates_individuals(self, population, small_config):
        assert len(population) == small_config.population_size
        assert all(isinstance(ind, Individual) for ind in population.individuals)

    def test_networks_follow_layer_widths(self, population):
        for individual in population.individuals:
            assert individual.network.size == 9
            assert individual.network.left.size == 6
            assert individual.network.depth == 2

    def test_networks_share_input_register(self, population, input_layer):
        assert population.input_layer is input_layer
        for individual in population.individuals:
            assert individual.input_layer is input_layer

    def test_networks_are_independent(self, population):
        networks = {id(ind.network) for ind in population.individuals}

        assert len(networks) == len(population)

    def test_new_network(self, population, input_layer):
        network = population.new_network()

        assert isinstance(network, InferredLayer)
        assert network.input_layer is input_layer


# ============================================================================
# Test scores and ranking
# ============================================================================

class TestPopulationRanking:
    """Test score reset, ranking and fittest lookup."""

    def test_reset_scores(self, population):
        assign_scores(population)

        population.reset_scores()

        assert all(ind.score == 0 for ind in population.individuals)

    def test_rank_descending(self, population):
        assign_scores(population)

        ranked = population.rank()

        scores = [ind.score for ind in ranked]
        assert scores == sorted(scores, reverse=True)
        assert ranked is population.individuals

    def test_rank_is_stable(self, population):
        before = list(population.individuals)

        population.rank()  # all scores are 0

        assert population.individuals == before

    def test_get_fittest_individual(self, population):
        assign_scores(population)
        best = population.individuals[-1]

        assert population.get_fittest_individual() is best

    def test_get_fittest_individual_empty(self, population):
        population.individuals = []

        assert population.get_fittest_individual() is None


# ============================================================================
# Test reproduction
# ============================================================================

class TestSpawnNextGeneration:
    """Test Population.spawn_next_generation."""

    def test_size_preserved(self, population, small_config):
        assign_scores(population)

        population.spawn_next_generation()

        assert len(population) == small_config.population_size

    def test_survivors_kept_unchanged(self, population):
        assign_scores(population)
        expected = sorted(population.individuals, key=lambda ind: ind.score, reverse=True)[:3]

        population.spawn_next_generation()

        assert population.individuals[:3] == expected
        assert [ind.score for ind in population.individuals[:3]] == [11, 10, 9]

    def test_tiers_are_clones_of_ranked_parents(self, population, small_config):
        small_config.mutation_mode = 'online'  # clones are not mutated
        assign_scores(population)

        population.spawn_next_generation()

        individuals = population.individuals
        best, second, third = individuals[:3]
        tiers = [(individuals[3:6], best), (individuals[6:8], second), (individuals[8:9], third)]
        for clones, parent in tiers:
            for clone in clones:
                assert clone is not parent
                assert clone.network is not parent.network
                assert clone.score == 0
                assert np.array_equal(clone.get_values(), parent.get_values())

    def test_online_mode_does_not_mutate_clones(self, population, small_config):
        small_config.mutation_mode = 'online'
        assign_scores(population)

        with patch.object(Individual, 'mutate') as mock_mutate:
            population.spawn_next_generation()

        mock_mutate.assert_not_called()

    def test_deferred_mode_mutates_clones_with_tier_rarity(self, population, small_config):
        small_config.mutation_mode = 'deferred'
        assign_scores(population)

        with patch.object(Individual, 'mutate') as mock_mutate:
            population.spawn_next_generation()

        rarities = [c.args[0] for c in mock_mutate.call_args_list]
        assert rarities == [2, 2, 2, 4, 4, 8]

    def test_deferred_mutation_leaves_parents_intact(self, population, small_config):
        small_config.mutation_mode = 'deferred'
        small_config.elite_tier_rarities = [1, 1, 1]
        assign_scores(population)
        ranked = sorted(population.individuals, key=lambda ind: ind.score, reverse=True)
        outputs_before = [ind.get_values() for ind in ranked[:3]]

        population.spawn_next_generation()

        for individual, before in zip(population.individuals[:3], outputs_before):
            assert np.array_equal(individual.get_values(), before)

    def test_bottom_replaced_with_fresh_networks(self, population):
        assign_scores(population)
        previous = {id(ind) for ind in population.individuals}
        previous_networks = {id(ind.network) for ind in population.individuals}

        population.spawn_next_generation()

        for individual in population.individuals[9:]:
            assert id(individual) not in previous
            assert id(individual.network) not in previous_networks
            assert individual.score == 0

    def test_no_tiers_replaces_everything_below_survivors(self, population, small_config):
        small_config.elite_tier_sizes    = []
        small_config.elite_tier_rarities = []
        assign_scores(population)
        previous = {id(ind) for ind in population.individuals}

        population.spawn_next_generation()

        kept = [ind for ind in population.individuals if id(ind) in previous]
        assert len(kept) == small_config.elite_survivors

    def test_tier_parents_taken_before_slots_are_overwritten(self, population, small_config):
        small_config.elite_survivors = 0
        small_config.mutation_mode   = 'online'
        assign_scores(population)
        ranked = sorted(population.individuals, key=lambda ind: ind.score, reverse=True)

        parents = []
        clone = Individual.clone

        def recording_clone(individual):
            parents.append(individual)
            return clone(individual)

        with patch.object(Individual, 'clone', recording_clone):
            population.spawn_next_generation()

        assert parents == [ranked[0]] * 3 + [ranked[1]] * 2 + [ranked[2]]
