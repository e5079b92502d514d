"""
Exceptions raised by the evolution and neural-network layers.

Every error here is a precondition violation detected at the call that
received bad input; none of them are retried or defaulted.
"""


class EvolutionError(ValueError):
    """Base class for genome / population errors."""


class EmptyPopulation(EvolutionError):
    """Selection or evolution was asked to work on zero individuals."""

    def __init__(self):
        super().__init__("population is empty")


class ChromosomeLengthMismatch(EvolutionError):
    """Crossover parents have different lengths."""

    def __init__(self, len_a: int, len_b: int):
        super().__init__(f"parents differ in length: {len_a} != {len_b}")
        self.len_a = len_a
        self.len_b = len_b


class InsufficientWeights(EvolutionError):
    """The flat weight sequence ran out before the network was complete."""

    def __init__(self, expected: int, got: int):
        super().__init__(f"got not enough weights: expected {expected}, got {got}")
        self.expected = expected
        self.got = got


class ExcessWeights(EvolutionError):
    """Weights remained after the last neuron of the network was built."""

    def __init__(self, expected: int, got: int):
        super().__init__(f"got too many weights: expected {expected}, got {got}")
        self.expected = expected
        self.got = got


class InvalidParameters(EvolutionError):
    """A strategy was constructed with out-of-range parameters."""


class InvalidFitness(EvolutionError):
    """Roulette-wheel selection met a negative fitness value."""

    def __init__(self, fitness: float):
        super().__init__(f"fitness must be non-negative, got {fitness}")
        self.fitness = fitness
