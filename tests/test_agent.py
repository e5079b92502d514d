"""
Tests for Brain, Agent and the AgentIndividual adapter.
"""

import pytest
import numpy as np

from agent import Agent
from agent_individual import AgentIndividual
from brain import Brain
from chromosome import Chromosome
from config import SPEED_INITIAL
from errors import ExcessWeights, InsufficientWeights
from eye import Eye
from neural_network import expected_weight_count

# 9 → 18 → 2
GENOME_LENGTH = (9 + 1) * 18 + (18 + 1) * 2


class TestBrain:
    """Tests for Brain topology and genome conversion."""

    def test_topology_follows_eye(self):
        widths = [layer.neurons for layer in Brain.topology(Eye(cells=5))]
        assert widths == [5, 10, 2]

    def test_random_brain_shape(self):
        brain = Brain.random(np.random.default_rng(0), Eye())
        assert brain.nn.topology() == [9, 18, 2]
        assert len(brain.propagate([0.0] * 9)) == 2

    def test_chromosome_round_trip(self):
        eye = Eye()
        brain = Brain.random(np.random.default_rng(0), eye)
        chromosome = brain.as_chromosome()

        assert len(chromosome) == GENOME_LENGTH
        assert Brain.from_chromosome(chromosome, eye).as_chromosome() == chromosome

    def test_genome_length_matches_topology(self):
        eye = Eye(cells=4)
        assert expected_weight_count(Brain.topology(eye)) == (4 + 1) * 8 + (8 + 1) * 2

    def test_short_chromosome(self):
        with pytest.raises(InsufficientWeights):
            Brain.from_chromosome(Chromosome([0.0] * (GENOME_LENGTH - 1)), Eye())

    def test_long_chromosome(self):
        with pytest.raises(ExcessWeights):
            Brain.from_chromosome(Chromosome([0.0] * (GENOME_LENGTH + 1)), Eye())


class TestAgent:
    """Tests for Agent construction."""

    def test_random_agent(self):
        agent = Agent.random(np.random.default_rng(0))

        assert 0.0 <= agent.position[0] < 1.0
        assert 0.0 <= agent.position[1] < 1.0
        assert agent.speed == SPEED_INITIAL
        assert agent.satiation == 0
        assert agent.eye.cells == 9

    def test_random_agent_is_seeded(self):
        a = Agent.random(np.random.default_rng(5))
        b = Agent.random(np.random.default_rng(5))

        assert np.array_equal(a.position, b.position)
        assert a.rotation == b.rotation
        assert a.as_chromosome() == b.as_chromosome()

    def test_from_chromosome_keeps_genome(self):
        rng = np.random.default_rng(0)
        chromosome = Chromosome(rng.uniform(-1, 1, GENOME_LENGTH))

        agent = Agent.from_chromosome(chromosome, rng)

        assert agent.as_chromosome() == chromosome
        assert agent.satiation == 0

    def test_heading_points_up_at_rotation_zero(self):
        agent = Agent.random(np.random.default_rng(0))
        agent.rotation = 0.0
        assert list(agent.heading()) == pytest.approx([0.0, 1.0])
        agent.rotation = np.pi / 2
        assert list(agent.heading()) == pytest.approx([-1.0, 0.0])


class TestAgentIndividual:
    """Tests for the Agent ↔ Individual adapter."""

    def test_from_agent(self):
        agent = Agent.random(np.random.default_rng(0))
        agent.satiation = 7

        individual = AgentIndividual.from_agent(agent)

        assert individual.fitness() == 7.0
        assert individual.chromosome() == agent.as_chromosome()

    def test_create_resets_fitness(self):
        chromosome = Chromosome([0.0] * GENOME_LENGTH)
        individual = AgentIndividual.create(chromosome)

        assert individual.fitness() == 0.0
        assert individual.chromosome() is chromosome

    def test_into_agent(self):
        rng = np.random.default_rng(0)
        agent = Agent.random(rng)
        agent.satiation = 3

        reborn = AgentIndividual.from_agent(agent).into_agent(rng)

        assert reborn is not agent
        assert reborn.satiation == 0
        assert reborn.as_chromosome() == agent.as_chromosome()
