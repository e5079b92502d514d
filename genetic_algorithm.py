"""
Genetic Algorithm engine for EvoForage.

The engine knows nothing about agents.  It works on any Individual –
something that exposes a Chromosome and a fitness score, and can be
created back from a Chromosome.

One generation (GeneticAlgorithm.evolve), per output slot:
  1. select parent A            (selection strategy)
  2. select parent B            (may be the same individual as A)
  3. cross their chromosomes    (crossover strategy)
  4. mutate the child in place  (mutation strategy)
  5. wrap the child as a new Individual with fitness 0

Random numbers are always drawn from the generator passed in, in exactly
that order, so a seeded generator reproduces the same population.
"""

import abc
import logging
from dataclasses import dataclass, asdict

import numpy as np

from chromosome import Chromosome
from errors import (ChromosomeLengthMismatch, EmptyPopulation,
                    InvalidFitness, InvalidParameters)

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# Individual
# ──────────────────────────────────────────────────────────────────────────────

class Individual(abc.ABC):
    """Anything the engine can evolve."""

    @classmethod
    @abc.abstractmethod
    def create(cls, chromosome: Chromosome) -> "Individual":
        """Build a not-yet-evaluated individual (fitness 0) from a genome."""

    @abc.abstractmethod
    def chromosome(self) -> Chromosome:
        ...

    @abc.abstractmethod
    def fitness(self) -> float:
        ...


# ──────────────────────────────────────────────────────────────────────────────
# Statistics
# ──────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Statistics:
    min_fitness: float
    max_fitness: float
    avg_fitness: float

    @classmethod
    def from_population(cls, population) -> "Statistics":
        if not population:
            raise EmptyPopulation()
        fitness = [float(i.fitness()) for i in population]
        return cls(
            min_fitness=min(fitness),
            max_fitness=max(fitness),
            avg_fitness=sum(fitness) / len(fitness),
        )

    def as_dict(self) -> dict:
        return asdict(self)

    def __str__(self) -> str:
        return (f"min={self.min_fitness:.2f}, "
                f"max={self.max_fitness:.2f}, "
                f"avg={self.avg_fitness:.2f}")


# ──────────────────────────────────────────────────────────────────────────────
# Selection
# ──────────────────────────────────────────────────────────────────────────────

class SelectionMethod(abc.ABC):

    @abc.abstractmethod
    def select(self, rng, population):
        ...


class RouletteWheelSelection(SelectionMethod):
    """
    Fitness-proportionate selection.

    Each individual is picked with probability fitness / total fitness.
    A population whose fitness sums to zero is sampled uniformly.
    Negative fitness is rejected with InvalidFitness.
    """

    def select(self, rng, population):
        if not population:
            raise EmptyPopulation()

        fitness = np.array([i.fitness() for i in population], dtype=np.float64)
        negative = fitness < 0
        if negative.any():
            raise InvalidFitness(float(fitness[negative][0]))

        # Zero-fitness individuals occupy an empty slice of the wheel.
        wheel = np.cumsum(fitness)
        total = wheel[-1]
        if total == 0:
            return population[int(rng.integers(len(population)))]

        spin  = rng.random() * total
        index = int(np.searchsorted(wheel, spin, side="right"))
        if index == len(population):
            # spin rounded up to the end of the wheel
            index = int(np.flatnonzero(fitness)[-1])
        return population[index]


# ──────────────────────────────────────────────────────────────────────────────
# Crossover
# ──────────────────────────────────────────────────────────────────────────────

class CrossoverMethod(abc.ABC):

    @abc.abstractmethod
    def crossover(self, rng, parent_a: Chromosome,
                  parent_b: Chromosome) -> Chromosome:
        ...


class UniformCrossover(CrossoverMethod):
    """Each gene comes from parent A or parent B on a fair coin flip."""

    def crossover(self, rng, parent_a: Chromosome,
                  parent_b: Chromosome) -> Chromosome:
        if len(parent_a) != len(parent_b):
            raise ChromosomeLengthMismatch(len(parent_a), len(parent_b))

        take_a = rng.random(len(parent_a)) < 0.5
        genes  = np.where(take_a, parent_a.as_array(), parent_b.as_array())
        return Chromosome(genes)


# ──────────────────────────────────────────────────────────────────────────────
# Mutation
# ──────────────────────────────────────────────────────────────────────────────

class MutationMethod(abc.ABC):

    @abc.abstractmethod
    def mutate(self, rng, child: Chromosome) -> None:
        ...


class GaussianMutation(MutationMethod):
    """
    With probability `probability` per gene, add
    uniform(-1, 1) * `coefficient` to it (in place).
    """

    def __init__(self, probability: float, coefficient: float):
        if not 0.0 <= probability <= 1.0:
            raise InvalidParameters(
                f"mutation probability must be in [0, 1], got {probability}")
        if coefficient < 0.0:
            raise InvalidParameters(
                f"mutation coefficient must be >= 0, got {coefficient}")
        self.probability = float(probability)
        self.coefficient = float(coefficient)

    def mutate(self, rng, child: Chromosome) -> None:
        for i in range(len(child)):
            if rng.random() < self.probability:
                child[i] = child[i] + rng.uniform(-1.0, 1.0) * self.coefficient

    def __repr__(self) -> str:
        return (f"GaussianMutation(probability={self.probability}, "
                f"coefficient={self.coefficient})")


# ──────────────────────────────────────────────────────────────────────────────
# Engine
# ──────────────────────────────────────────────────────────────────────────────

class GeneticAlgorithm:
    """
    Orchestrates one generational step with pluggable strategies.
    """

    def __init__(self, selection_method: SelectionMethod,
                 crossover_method: CrossoverMethod,
                 mutation_method: MutationMethod):
        self.selection_method = selection_method
        self.crossover_method = crossover_method
        self.mutation_method  = mutation_method

    def evolve(self, rng, population):
        """
        Breed a new population of the same size.

        Returns:
            (new_population, Statistics of the *input* population)
        """
        if not population:
            raise EmptyPopulation()

        factory = type(population[0])
        new_population = []
        for _ in range(len(population)):
            parent_a = self.selection_method.select(rng, population).chromosome()
            parent_b = self.selection_method.select(rng, population).chromosome()

            child = self.crossover_method.crossover(rng, parent_a, parent_b)
            self.mutation_method.mutate(rng, child)

            new_population.append(factory.create(child))

        stats = Statistics.from_population(population)
        logger.debug("evolved %d individuals (%s)", len(new_population), stats)
        return new_population, stats
