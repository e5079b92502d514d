"""
Agent class for EvoForage.

Each agent has:
  - a position in the unit square and a heading (rotation, radians)
  - a speed, kept in [SPEED_MIN, SPEED_MAX] by the simulation
  - a satiation counter (food eaten this generation = fitness)
  - an Eye and a Brain it owns exclusively

Agents never survive evolution: the next generation is built from
evolved chromosomes with Agent.from_chromosome.
"""

import math

import numpy as np

from brain import Brain
from chromosome import Chromosome
from config import SPEED_INITIAL
from eye import Eye


class Agent:
    __slots__ = ("position", "rotation", "speed", "satiation", "eye", "brain")

    def __init__(self, eye: Eye, brain: Brain, rng):
        self.position  = rng.random(2)
        self.rotation  = float(rng.uniform(0.0, 2 * math.pi))
        self.speed     = SPEED_INITIAL
        self.satiation = 0
        self.eye       = eye
        self.brain     = brain

    @classmethod
    def random(cls, rng) -> "Agent":
        eye   = Eye()
        brain = Brain.random(rng, eye)
        return cls(eye, brain, rng)

    @classmethod
    def from_chromosome(cls, chromosome: Chromosome, rng) -> "Agent":
        eye   = Eye()
        brain = Brain.from_chromosome(chromosome, eye)
        return cls(eye, brain, rng)

    def as_chromosome(self) -> Chromosome:
        return self.brain.as_chromosome()

    # ──────────────────────────────────────────────────────────────────────────

    def heading(self) -> np.ndarray:
        """Unit vector the agent moves along (rotation 0 → +y)."""
        return np.array([-math.sin(self.rotation), math.cos(self.rotation)])

    def __repr__(self) -> str:
        x, y = self.position
        return (f"Agent(x={x:.3f}, y={y:.3f}, rotation={self.rotation:.3f}, "
                f"speed={self.speed:.4f}, satiation={self.satiation})")
