"""
Trial Module

This module implements the generational evolutionary loop, with built-in
support for CPU-based parallelization of the evaluation using joblib.

A trial represents one independent run of the algorithm: a population of
bitwise networks is repeatedly scored against random boards, ranked, and
renewed through elitist copying, mutation and fresh random networks.
"""

from joblib     import Parallel, delayed
from statistics import mean
from typing     import Callable, Optional, TYPE_CHECKING

import numpy as np

from evobits.fitness.environment import random_environment
from evobits.fitness.step        import step
from evobits.network.layers      import StaticLayer
from evobits.pool.population     import Population
from evobits.run.config          import Config

if TYPE_CHECKING:
    from evobits.network import InferredLayer
    from evobits.pool    import Individual

Observer = Callable[[int, np.ndarray], None]

def _evaluate_network(network     : 'InferredLayer',
                      environments: list[np.ndarray],
                      config      : Config,
                      seed        : int) -> tuple[int, Optional['InferredLayer']]:
    """
    Score one network against a fixed sequence of boards.

    Worker entry point for parallel evaluation. The network is evaluated on
    a copy wired to a private input register, so workers never share mutable
    state. The boards are read-only; committed moves go to per-round copies.

    Returns:
        (score, network) where network is the online-mutated copy, or None
        when online mutation is disabled
    """
    rng         = np.random.default_rng(seed)
    input_layer = StaticLayer(np.zeros(config.board_size, dtype=np.uint8))
    network     = network.copy()
    network.attach(input_layer)
    online      = config.mutation_mode == 'online'

    score = 0
    for environment in environments:
        input_layer.load(environment)
        environment_out = environment.copy()
        if online:
            network.mutate(config.online_mutation_rarity, rng)
        score += step(input_layer.get_values(), network.get_values(), environment_out, config, rng)

    return score, (network if online else None)

class Trial:
    """
    One run of the evolutionary loop.

    Each generation:
     1. every score is reset to 0
     2. 'evaluations_per_generation' times, a random board is generated and
        copied into the shared input register, and every network's output is
        scored against it (in "online" mode each network is first mutated)
     3. the population is ranked by score
     4. survivors are kept, elite tiers are filled with clones of the best,
        and the rest of the population is replaced with random networks
     5. the best score and output vector are reported

    The trial runs until 'max_number_generations' is reached, forever if that is None.

    Subclasses can override:
    - _report_progress(): Display progress after each generation
    - _final_report():    Display final results
    - _terminate():       Custom termination logic

    Public Attributes:
        history: One dict of statistics per generation

    Public Properties:
        population:      The current population (None before 'run')
        best_individual: The best individual of the last ranked generation

    Public Methods:
        run(): Execute a complete trial
    """

    def __init__(self,
                 config         : Config,
                 suppress_output: bool               = False,
                 observer       : Optional[Observer] = None):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters
            suppress_output: If True, suppress progress and final reports
            observer:        Called once per generation with (best score, best output)
        """
        self._config            : Config                = config
        self._generation_counter: int                   = 0
        self._population        : Optional[Population]  = None
        self._suppress_output   : bool                  = suppress_output
        self._observer          : Optional[Observer]    = observer
        self._rng               : Optional[np.random.Generator] = None
        self._input_layer       : Optional[StaticLayer] = None
        self._best              : Optional['Individual'] = None
        self.history            : list[dict]            = []

    @property
    def population(self) -> Optional[Population]:
        return self._population

    @property
    def best_individual(self) -> Optional['Individual']:
        return self._best

    def run(self, num_jobs: int = 1):
        """
        Run the trial.

        Resets the trial state and runs the evolutionary
        loop until the terminate condition is met.

        Parameters:
            num_jobs: Number of parallel processes for evaluating individuals
                      1 = serial (no parallelization)
                     -1 = use all available CPU cores
                     >1 = use specified number of processes
        """
        # Reject inconsistent settings, also for Config objects edited in code
        self._config.validate()

        # Reset the trial state before starting a new run
        self._reset()

        # Create the initial population, all reading the same input register
        self._population = Population(self._config, self._input_layer, self._rng)

        # Evolution loop
        while not self._terminate():
            self._generation_counter += 1

            # Score every individual
            self._population.reset_scores()
            self._evaluate_all(num_jobs)

            # Rank, and remember the best before it is cloned
            self._record_generation()

            # Survivors, elite clones and newcomers make the next generation
            self._population.spawn_next_generation()

            if self._observer is not None:
                self._observer(self.history[-1]['best_score'], self.history[-1]['best_output'])

            # Display progress after each generation
            if not self._suppress_output:
                self._report_progress()

        # Produce final report
        if not self._suppress_output:
            self._final_report()

    def _reset(self):
        """
        Reset the trial state before starting a new run.
        """
        self._rng                = np.random.default_rng(self._config.seed)
        self._input_layer        = StaticLayer(np.zeros(self._config.board_size, dtype=np.uint8))
        self._generation_counter = 0
        self._best               = None
        self.history             = []

    def _evaluate_all(self, num_jobs: int):
        """
        Accumulate the score of every individual over one generation's boards.

        Parameters:
            num_jobs: Number of parallel processes for evaluation
        """
        if num_jobs == 1:
            self._evaluate_serial()
        else:
            self._evaluate_parallel(num_jobs)

    def _evaluate_serial(self):
        config = self._config
        online = config.mutation_mode == 'online'

        for _ in range(config.evaluations_per_generation):
            # Prepare environment and input
            environment = random_environment(config.board_size, self._rng)
            self._input_layer.load(environment)

            for individual in self._population.individuals:
                if online:
                    individual.mutate(config.online_mutation_rarity, self._rng)
                values = individual.get_values()
                individual.score += step(self._input_layer.get_values(), values, environment, config, self._rng)

    def _evaluate_parallel(self, num_jobs: int):
        """
        Evaluate individuals in parallel using joblib.

        The generation's boards are drawn once and shared read-only with every
        worker, so all individuals still face the same sequence of boards.
        """
        config      = self._config
        individuals = self._population.individuals

        environments = [random_environment(config.board_size, self._rng)
                        for _ in range(config.evaluations_per_generation)]
        seeds = self._rng.integers(0, 2**31 - 1, size=len(individuals))

        results = Parallel(num_jobs)(delayed(_evaluate_network)(ind.network, environments, config, int(seed))
                                     for ind, seed in zip(individuals, seeds))

        for individual, (score, network) in zip(individuals, results):
            individual.score = score
            if network is not None:
                network.attach(self._input_layer)
                individual.network = network

        # Leave the register as the serial path would
        self._input_layer.load(environments[-1])

    def _record_generation(self):
        ranked = self._population.rank()
        best   = self._population.get_fittest_individual()
        self._best = best
        self.history.append({
            'generation' : self._generation_counter,
            'best_score' : best.score,
            'mean_score' : mean(ind.score for ind in ranked),
            'best_output': best.get_values().copy(),
        })

    def _report_progress(self):
        """
        Report trial progress after each generation.

        Prints the best score and the best network's output vector.
        This method is suppressed by setting 'self._suppress_output' to 'True'.
        """
        stats = self.history[-1]
        print(f"Generation {stats['generation']:05d} | best score {stats['best_score']:+d} | "
              f"mean score {stats['mean_score']:+.1f}")
        print(stats['best_output'].tolist())

    def _final_report(self):
        """
        Produce final report at the end of the trial.
        """
        if not self.history:
            print("No generation was run.")
            return
        best = max(self.history, key=lambda stats: stats['best_score'])
        print(f"Ran {self._generation_counter} generations; "
              f"best score {best['best_score']:+d} in generation {best['generation']}")
        print(best['best_output'].tolist())

    def _terminate(self) -> bool:
        """
        Determine whether the trial should terminate.

        Stops after 'max_number_generations' generations;
        never stops if that parameter is None.
        """
        if self._config.max_number_generations is None:
            return False
        return self._generation_counter >= self._config.max_number_generations
