"""
Tests for the genetic algorithm engine and its strategies.

Run with: python -m pytest tests/test_genetic_algorithm.py -v
"""

from collections import Counter

import pytest
import numpy as np

from chromosome import Chromosome
from errors import (ChromosomeLengthMismatch, EmptyPopulation,
                    InvalidFitness, InvalidParameters)
from genetic_algorithm import (
    GaussianMutation,
    GeneticAlgorithm,
    Individual,
    RouletteWheelSelection,
    Statistics,
    UniformCrossover,
)


class FakeIndividual(Individual):
    """Individual with an explicit fitness, for driving the engine."""

    def __init__(self, fitness, genes=(0.0, 0.0, 0.0)):
        self._fitness = fitness
        self._chromosome = Chromosome(genes)

    @classmethod
    def create(cls, chromosome):
        individual = cls(0.0)
        individual._chromosome = chromosome
        return individual

    def chromosome(self):
        return self._chromosome

    def fitness(self):
        return self._fitness


class TestRouletteWheelSelection:
    """Tests for fitness-proportionate selection."""

    def test_distribution_follows_fitness(self):
        rng = np.random.default_rng(0)
        population = [FakeIndividual(f) for f in (1.0, 2.0, 3.0, 4.0)]
        selection = RouletteWheelSelection()

        draws = 20000
        histogram = Counter(
            selection.select(rng, population).fitness() for _ in range(draws))

        for fitness in (1.0, 2.0, 3.0, 4.0):
            assert histogram[fitness] / draws == pytest.approx(fitness / 10.0, abs=0.02)

    def test_zero_fitness_never_selected(self):
        rng = np.random.default_rng(1)
        population = [FakeIndividual(0.0), FakeIndividual(1.0), FakeIndividual(0.0)]
        selection = RouletteWheelSelection()

        for _ in range(200):
            assert selection.select(rng, population) is population[1]

    def test_all_zero_fitness_is_uniform(self):
        rng = np.random.default_rng(2)
        population = [FakeIndividual(0.0) for _ in range(4)]
        selection = RouletteWheelSelection()

        picked = Counter(id(selection.select(rng, population)) for _ in range(4000))

        assert set(picked) == {id(i) for i in population}
        for count in picked.values():
            assert count / 4000 == pytest.approx(0.25, abs=0.05)

    def test_spin_at_end_of_wheel_skips_trailing_zero(self):
        """A spin that rounds up to the total lands on a positive slice."""

        class TopSpin:
            def random(self):
                return 1.0 - 2 ** -53

        fitness = np.random.default_rng(5).uniform(0.0, 10.0, size=40)
        population = [FakeIndividual(float(f)) for f in fitness]
        population.append(FakeIndividual(0.0))

        picked = RouletteWheelSelection().select(TopSpin(), population)

        assert picked is not population[-1]
        assert picked.fitness() > 0.0

    def test_empty_population(self):
        with pytest.raises(EmptyPopulation):
            RouletteWheelSelection().select(np.random.default_rng(0), [])

    def test_negative_fitness_rejected(self):
        population = [FakeIndividual(1.0), FakeIndividual(-0.5)]
        with pytest.raises(InvalidFitness) as exc:
            RouletteWheelSelection().select(np.random.default_rng(0), population)
        assert exc.value.fitness == -0.5


class TestUniformCrossover:
    """Tests for gene-by-gene crossover."""

    def test_child_genes_come_from_parents(self):
        rng = np.random.default_rng(0)
        parent_a = Chromosome([1.0, 1.0, 1.0, 1.0])
        parent_b = Chromosome([0.0, 0.0, 0.0, 0.0])

        for _ in range(50):
            child = UniformCrossover().crossover(rng, parent_a, parent_b)
            assert len(child) == 4
            assert all(g in (0.0, 1.0) for g in child)

    def test_both_parents_contribute(self):
        rng = np.random.default_rng(0)
        parent_a = Chromosome([1.0] * 100)
        parent_b = Chromosome([0.0] * 100)

        child = UniformCrossover().crossover(rng, parent_a, parent_b)
        ones = sum(child)

        assert 30 < ones < 70

    def test_parents_left_untouched(self):
        rng = np.random.default_rng(0)
        parent_a = Chromosome([1.0, 2.0, 3.0])
        parent_b = Chromosome([4.0, 5.0, 6.0])

        UniformCrossover().crossover(rng, parent_a, parent_b)

        assert parent_a == Chromosome([1.0, 2.0, 3.0])
        assert parent_b == Chromosome([4.0, 5.0, 6.0])

    def test_length_mismatch(self):
        with pytest.raises(ChromosomeLengthMismatch):
            UniformCrossover().crossover(
                np.random.default_rng(0),
                Chromosome([1.0, 2.0]),
                Chromosome([1.0, 2.0, 3.0]),
            )


class TestGaussianMutation:
    """Tests for per-gene perturbation."""

    ORIGINAL = [1.0, 2.0, 3.0, 4.0, 5.0]

    def _mutated(self, probability, coefficient, seed=0):
        child = Chromosome(self.ORIGINAL)
        GaussianMutation(probability, coefficient).mutate(
            np.random.default_rng(seed), child)
        return child.to_list()

    @pytest.mark.parametrize("coefficient", [0.0, 0.5, 3.0])
    def test_zero_probability_keeps_genes(self, coefficient):
        assert self._mutated(0.0, coefficient) == self.ORIGINAL

    def test_zero_coefficient_keeps_genes(self):
        assert self._mutated(1.0, 0.0) == self.ORIGINAL
        assert self._mutated(0.5, 0.0) == self.ORIGINAL

    def test_full_probability_changes_every_gene(self):
        mutated = self._mutated(1.0, 0.1)
        for before, after in zip(self.ORIGINAL, mutated):
            assert before != after
            assert abs(before - after) <= 0.1

    def test_half_probability_changes_some_genes(self):
        child = Chromosome([0.0] * 200)
        GaussianMutation(0.5, 0.1).mutate(np.random.default_rng(4), child)
        changed = sum(1 for g in child if g != 0.0)
        assert 60 < changed < 140

    @pytest.mark.parametrize("probability,coefficient", [
        (-0.1, 0.5),
        (1.1, 0.5),
        (0.5, -0.01),
    ])
    def test_invalid_parameters(self, probability, coefficient):
        with pytest.raises(InvalidParameters):
            GaussianMutation(probability, coefficient)


class TestStatistics:
    """Tests for population statistics."""

    def test_from_population(self):
        population = [FakeIndividual(f) for f in (1.0, 2.0, 3.0, 4.0)]
        stats = Statistics.from_population(population)

        assert stats.min_fitness == 1.0
        assert stats.max_fitness == 4.0
        assert stats.avg_fitness == 2.5

    def test_formatting(self):
        stats = Statistics(min_fitness=1.0, max_fitness=4.0, avg_fitness=2.5)
        assert str(stats) == "min=1.00, max=4.00, avg=2.50"
        assert stats.as_dict() == {
            "min_fitness": 1.0, "max_fitness": 4.0, "avg_fitness": 2.5}

    def test_empty_population(self):
        with pytest.raises(EmptyPopulation):
            Statistics.from_population([])


class TestGeneticAlgorithm:
    """Tests for the generational step."""

    def _engine(self):
        return GeneticAlgorithm(
            RouletteWheelSelection(),
            UniformCrossover(),
            GaussianMutation(0.5, 0.5),
        )

    def _population(self):
        return [
            FakeIndividual(1.0, [0.0, 0.0, 0.0]),
            FakeIndividual(2.0, [1.0, 1.0, 1.0]),
            FakeIndividual(3.0, [1.0, 2.0, 1.0]),
            FakeIndividual(4.0, [1.0, 2.0, 4.0]),
        ]

    def test_evolve_preserves_size(self):
        rng = np.random.default_rng(0)
        population = self._population()

        new_population, stats = self._engine().evolve(rng, population)

        assert len(new_population) == len(population)
        assert all(isinstance(i, FakeIndividual) for i in new_population)
        assert all(i.fitness() == 0.0 for i in new_population)
        assert all(len(i.chromosome()) == 3 for i in new_population)

    def test_statistics_describe_input_population(self):
        rng = np.random.default_rng(0)
        _, stats = self._engine().evolve(rng, self._population())

        assert stats == Statistics(1.0, 4.0, 2.5)
        assert stats.min_fitness <= stats.avg_fitness <= stats.max_fitness

    def test_evolve_is_deterministic(self):
        a, _ = self._engine().evolve(np.random.default_rng(7), self._population())
        b, _ = self._engine().evolve(np.random.default_rng(7), self._population())

        assert [i.chromosome() for i in a] == [i.chromosome() for i in b]

    def test_evolve_with_zero_fitness_population(self):
        rng = np.random.default_rng(0)
        population = [FakeIndividual(0.0, [float(i)] * 3) for i in range(5)]

        new_population, stats = self._engine().evolve(rng, population)

        assert len(new_population) == 5
        assert stats == Statistics(0.0, 0.0, 0.0)

    def test_evolve_without_mutation_recombines_parents(self):
        engine = GeneticAlgorithm(
            RouletteWheelSelection(),
            UniformCrossover(),
            GaussianMutation(0.0, 0.0),
        )
        population = self._population()
        genes_at = [{i.chromosome()[k] for i in population} for k in range(3)]

        new_population, _ = engine.evolve(np.random.default_rng(3), population)

        for individual in new_population:
            for k, gene in enumerate(individual.chromosome()):
                assert gene in genes_at[k]

    def test_empty_population(self):
        with pytest.raises(EmptyPopulation):
            self._engine().evolve(np.random.default_rng(0), [])
