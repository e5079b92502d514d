"""
Adapter between the simulation's agents and the genetic algorithm.

The engine only sees AgentIndividual: the agent's food count becomes its
fitness and its brain weights become its chromosome.  After evolution each
individual is turned back into a brand-new Agent.
"""

from agent import Agent
from chromosome import Chromosome
from genetic_algorithm import Individual


class AgentIndividual(Individual):
    __slots__ = ("_fitness", "_chromosome")

    def __init__(self, fitness: float, chromosome: Chromosome):
        self._fitness    = float(fitness)
        self._chromosome = chromosome

    @classmethod
    def from_agent(cls, agent: Agent) -> "AgentIndividual":
        return cls(agent.satiation, agent.as_chromosome())

    def into_agent(self, rng) -> Agent:
        return Agent.from_chromosome(self._chromosome, rng)

    # Individual ───────────────────────────────────────────────────────────────

    @classmethod
    def create(cls, chromosome: Chromosome) -> "AgentIndividual":
        return cls(0.0, chromosome)

    def chromosome(self) -> Chromosome:
        return self._chromosome

    def fitness(self) -> float:
        return self._fitness
