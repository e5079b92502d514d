"""
Simulation Engine for EvoForage.

Every step:
  1. Collisions  – agents eat food within FOOD_RADIUS, eaten food respawns
  2. Brains      – eye → network → speed / rotation deltas
  3. Movement    – agents advance along their heading, edges wrap
  4. Generation  – after `generation_limit` steps the population is evolved

One numpy Generator is threaded through everything that needs randomness,
always in the same order, so two simulations built from the same seed and
stepped the same number of times are identical.

RNG consumption order:
  construction  – each agent (brain weights, position, rotation), then foods
  collisions    – agent-major, food-minor; one position per eaten food
  evolution     – GeneticAlgorithm.evolve, then each new agent
                  (position, rotation) in population order, then every food
"""

import logging

import numpy as np

from agent_individual import AgentIndividual
from config import (
    AGENT_COUNT, FOOD_COUNT, FOOD_RADIUS,
    SPEED_MIN, SPEED_MAX, SPEED_ACCEL, ROTATION_ACCEL,
    GENERATION_LIMIT, MUTATION_PROBABILITY, MUTATION_COEFFICIENT,
)
from eye import wrap_angle
from genetic_algorithm import (GaussianMutation, GeneticAlgorithm,
                               RouletteWheelSelection, UniformCrossover)
from world import World, wrap_unit

logger = logging.getLogger(__name__)


class Simulation:
    """
    Main simulation controller.
    """

    def __init__(self, world: World, ga: GeneticAlgorithm, rng,
                 generation_limit: int = GENERATION_LIMIT, seed=None):
        if generation_limit < 1:
            raise ValueError(
                f"generation_limit must be >= 1, got {generation_limit}")
        self._world           = world
        self.ga               = ga
        self.rng              = rng
        self.generation_limit = generation_limit
        self.seed             = seed
        self.age              = 0     # steps since the last evolution
        self.generation       = 0     # completed evolutions

    @classmethod
    def random(
        cls,
        seed:                 int   = None,
        agent_count:          int   = AGENT_COUNT,
        food_count:           int   = FOOD_COUNT,
        generation_limit:     int   = GENERATION_LIMIT,
        mutation_probability: float = MUTATION_PROBABILITY,
        mutation_coefficient: float = MUTATION_COEFFICIENT,
    ) -> "Simulation":
        """Build a world and GA from a seed (None = fresh OS entropy)."""
        ga = GeneticAlgorithm(
            RouletteWheelSelection(),
            UniformCrossover(),
            GaussianMutation(mutation_probability, mutation_coefficient),
        )
        rng   = np.random.default_rng(seed)
        world = World.random(rng, agent_count, food_count)
        return cls(world, ga, rng, generation_limit, seed)

    # ──────────────────────────────────────────────────────────────────────────
    # Public API
    # ──────────────────────────────────────────────────────────────────────────

    def world(self) -> World:
        return self._world

    def step(self):
        """
        Advance one tick.

        Returns:
            Statistics on a generational boundary, otherwise None
        """
        self._process_collisions()
        self._process_brains()
        self._process_movement()

        self.age += 1
        if self.age > self.generation_limit:
            return self._evolve()
        return None

    def train(self):
        """Step until the next generational boundary and return its Statistics."""
        while True:
            stats = self.step()
            if stats is not None:
                return stats

    # ──────────────────────────────────────────────────────────────────────────
    # One tick
    # ──────────────────────────────────────────────────────────────────────────

    def _process_collisions(self):
        for agent in self._world.agents:
            for food in self._world.foods:
                distance = np.linalg.norm(agent.position - food.position)
                if distance <= FOOD_RADIUS:
                    agent.satiation += 1
                    food.relocate(self.rng)

    def _process_brains(self):
        foods = self._world.foods
        for agent in self._world.agents:
            vision   = agent.eye.process_vision(agent.position, agent.rotation, foods)
            response = agent.brain.propagate(vision)

            speed    = min(max(response[0], -SPEED_ACCEL), SPEED_ACCEL)
            rotation = min(max(response[1], -ROTATION_ACCEL), ROTATION_ACCEL)

            agent.speed     = min(max(agent.speed + speed, SPEED_MIN), SPEED_MAX)
            agent.rotation  = wrap_angle(agent.rotation + rotation)

    def _process_movement(self):
        for agent in self._world.agents:
            x, y = agent.position + agent.heading() * agent.speed
            agent.position = np.array([wrap_unit(x), wrap_unit(y)])

    # ──────────────────────────────────────────────────────────────────────────
    # Evolution
    # ──────────────────────────────────────────────────────────────────────────

    def _evolve(self):
        self.age = 0

        current_population = [AgentIndividual.from_agent(a)
                              for a in self._world.agents]

        evolved_population, stats = self.ga.evolve(self.rng, current_population)

        self._world.agents = [individual.into_agent(self.rng)
                              for individual in evolved_population]

        for food in self._world.foods:
            food.relocate(self.rng)

        self.generation += 1
        logger.debug("generation %d finished: %s", self.generation, stats)
        return stats
