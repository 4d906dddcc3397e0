"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path

import numpy as np

# Add the source directory to the Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir / "src"))


@pytest.fixture(autouse=True)
def reset_individual_id_generator():
    """Reset Individual ID generator before each test."""
    from itertools import count
    from evobits.pool.individual import Individual
    Individual._id_generator = count(0)
    yield
    Individual._id_generator = count(0)


@pytest.fixture
def rng():
    """A seeded random number generator, for reproducibility."""
    return np.random.default_rng(42)


@pytest.fixture
def configs_dir():
    """Directory holding the shipped INI configuration files."""
    return root_dir / "configs"


@pytest.fixture
def small_config():
    """A default Config scaled down for fast tests."""
    from evobits.run.config import Config
    config = Config()
    config.population_size            = 12
    config.layer_widths               = [6, 9]
    config.evaluations_per_generation = 4
    config.elite_survivors            = 3
    config.elite_tier_sizes           = [3, 2, 1]
    config.elite_tier_rarities        = [2, 4, 8]
    config.max_number_generations     = 3
    config.seed                       = 7
    return config
