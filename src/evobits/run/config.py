import configparser
import os
import warnings

FITNESS_VARIANTS = ('discrete', 'continuous')
MUTATION_MODES   = ('online', 'deferred')

class Config:

    @staticmethod
    def _parse_int_list(raw_value) -> list[int]:
        """
        Parse a comma-separated list of integers.

        Parameters:
            raw_value: Either a string such as "18, 18, 9" or already a sequence

        Returns:
            List of integers
        """
        if isinstance(raw_value, (list, tuple)):
            return [int(v) for v in raw_value]
        raw_value = raw_value.strip()
        if not raw_value:
            return []
        try:
            return [int(v.strip()) for v in raw_value.split(',')]
        except ValueError:
            raise ValueError(f"Invalid integer list '{raw_value}'") from None

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a default Config.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, every parameter takes its default value,
                         the reference tic-tac-toe setup.
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.population_size = 100
            self.board_size      = 9
            self.layer_widths    = [18, 18, 18, 9]

            self.evaluations_per_generation = 50
            self.fitness_variant            = 'continuous'
            self.mutation_mode              = 'online'
            self.online_mutation_rarity     = 10000

            self.elite_survivors     = 10
            self.elite_tier_sizes    = [10, 5, 5]
            self.elite_tier_rarities = [10, 100, 1000]

            self.zero_bonus      = 10
            self.select_bonus    = 100
            self.illegal_penalty = 3
            self.commit_bonus    = 1000
            self.noise_max       = 10

            self.continuous_zero_bonus      = 14
            self.continuous_select_bonus    = 749
            self.continuous_illegal_penalty = 3
            self.continuous_commit_bonus    = 234567

            self.max_number_generations = None
            self.seed                   = None

            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == list:
                    return self._parse_int_list(raw_value)
                elif value_type == str:
                    return raw_value.strip()
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [POPULATION_INIT]

        # The number of networks in each generation.
        self.population_size = get_value('POPULATION_INIT', 'population_size', int)

        # The number of cells on the board; this is the width of the
        # input register and should be the width of the network output.
        self.board_size = get_value('POPULATION_INIT', 'board_size', int, default=9)

        # Widths of the inferred layers, from the input side to the output.
        # The last width is the action-space width (one output per cell).
        self.layer_widths = get_value('POPULATION_INIT', 'layer_widths', list)

        # [EVALUATION]

        # How many random environments every network is scored against per generation.
        self.evaluations_per_generation = get_value('EVALUATION', 'evaluations_per_generation', int)

        # The scoring policy.
        # Allowed values:
        #   "discrete"   - flat per-zero bonus, random tie-breaking noise
        #   "continuous" - graded closeness-to-zero reward, commit-weighted bonuses, no noise
        self.fitness_variant = get_value('EVALUATION', 'fitness_variant', str)

        # When mutation happens.
        # Allowed values:
        #   "online"   - every network is mutated right before each evaluation
        #   "deferred" - only the elite clones are mutated, after selection
        self.mutation_mode = get_value('EVALUATION', 'mutation_mode', str, default='online')

        # Inverse per-mask mutation probability used in "online" mode.
        self.online_mutation_rarity = get_value('EVALUATION', 'online_mutation_rarity', int, default=10000)

        # [REPRODUCTION]

        # The number of top-ranked networks carried over unchanged.
        self.elite_survivors = get_value('REPRODUCTION', 'elite_survivors', int)

        # The size of each elite tier; tier k is filled with clones of the
        # network ranked k (0 = best). The slots following the tiers are
        # filled with freshly constructed random networks.
        self.elite_tier_sizes = get_value('REPRODUCTION', 'elite_tier_sizes', list)

        # The mutation rarity applied to the clones of each tier ("deferred" mode only).
        # Usually increasing: the best network's clones mutate the most.
        self.elite_tier_rarities = get_value('REPRODUCTION', 'elite_tier_rarities', list)

        # [FITNESS]

        # Constants of the "discrete" variant.
        self.zero_bonus      = get_value('FITNESS', 'zero_bonus'     , int, default=10)
        self.select_bonus    = get_value('FITNESS', 'select_bonus'   , int, default=100)
        self.illegal_penalty = get_value('FITNESS', 'illegal_penalty', int, default=3)
        self.commit_bonus    = get_value('FITNESS', 'commit_bonus'   , int, default=1000)

        # Exclusive upper bound of the uniform noise added to a "discrete" score.
        self.noise_max = get_value('FITNESS', 'noise_max', int, default=10)

        # Constants of the "continuous" variant.
        self.continuous_zero_bonus      = get_value('FITNESS', 'continuous_zero_bonus'     , int, default=14)
        self.continuous_select_bonus    = get_value('FITNESS', 'continuous_select_bonus'   , int, default=749)
        self.continuous_illegal_penalty = get_value('FITNESS', 'continuous_illegal_penalty', int, default=3)
        self.continuous_commit_bonus    = get_value('FITNESS', 'continuous_commit_bonus'   , int, default=234567)

        # [TERMINATION]

        # The number of generations after which to stop the run.
        # Use "None" to run until the process is interrupted.
        self.max_number_generations = get_value('TERMINATION', 'max_number_generations', int, default=None)

        # [RANDOM]

        # Seed of the random number generator; "None" draws fresh OS entropy.
        self.seed = get_value('RANDOM', 'seed', int, default=None)

        self.validate()

    @property
    def elite_tiers(self) -> list[tuple[int, int]]:
        """(size, rarity) pairs, one per elite tier."""
        return list(zip(self.elite_tier_sizes, self.elite_tier_rarities))

    def validate(self):
        """
        Check the configuration for inconsistent values.

        Raises:
            ValueError: if a parameter is out of range or parameters contradict each other
        """
        if self.population_size is None or self.population_size < 1:
            raise ValueError(f"population_size must be positive, got {self.population_size}")
        if self.board_size < 1:
            raise ValueError(f"board_size must be positive, got {self.board_size}")
        if not self.layer_widths:
            raise ValueError("layer_widths must name at least one layer")
        if any(width < 1 for width in self.layer_widths):
            raise ValueError(f"layer_widths must all be positive, got {self.layer_widths}")
        if self.evaluations_per_generation < 1:
            raise ValueError(f"evaluations_per_generation must be positive, got {self.evaluations_per_generation}")
        if self.fitness_variant not in FITNESS_VARIANTS:
            raise ValueError(f"bad fitness_variant '{self.fitness_variant}', use one of {FITNESS_VARIANTS}")
        if self.mutation_mode not in MUTATION_MODES:
            raise ValueError(f"bad mutation_mode '{self.mutation_mode}', use one of {MUTATION_MODES}")
        if self.online_mutation_rarity < 1:
            raise ValueError(f"online_mutation_rarity must be positive, got {self.online_mutation_rarity}")

        if len(self.elite_tier_sizes) != len(self.elite_tier_rarities):
            raise ValueError("elite_tier_sizes and elite_tier_rarities must have the same length")
        if any(size < 0 for size in self.elite_tier_sizes):
            raise ValueError(f"elite_tier_sizes must not be negative, got {self.elite_tier_sizes}")
        if any(rarity < 1 for rarity in self.elite_tier_rarities):
            raise ValueError(f"elite_tier_rarities must all be positive, got {self.elite_tier_rarities}")
        if self.elite_survivors < 0:
            raise ValueError(f"elite_survivors must not be negative, got {self.elite_survivors}")
        if len(self.elite_tier_sizes) > self.population_size:
            raise ValueError(f"{len(self.elite_tier_sizes)} elite tiers need as many ranked parents, "
                             f"population_size={self.population_size}")
        if self.elite_survivors + sum(self.elite_tier_sizes) > self.population_size:
            raise ValueError(f"elite_survivors + sum(elite_tier_sizes) exceeds population_size={self.population_size}")

        if self.noise_max < 1:
            raise ValueError(f"noise_max must be positive, got {self.noise_max}")
        if self.max_number_generations is not None and self.max_number_generations < 0:
            raise ValueError(f"max_number_generations must not be negative, got {self.max_number_generations}")

        if self.layer_widths[-1] != self.board_size:
            warnings.warn(f"output width {self.layer_widths[-1]} differs from board_size {self.board_size}; "
                          "scoring will abort with a length mismatch")

    def __setattr__(self, name, value):
        """
        Override 'setattr' to automatically parse the integer lists when set.
        This allows users to write config.layer_widths = "18, 9".
        """
        if name in ('layer_widths', 'elite_tier_sizes', 'elite_tier_rarities') and value is not None:
            value = self._parse_int_list(value)
        super().__setattr__(name, value)
