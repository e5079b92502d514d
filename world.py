"""
World for EvoForage.

The world is the unit square [0, 1) × [0, 1) with toroidal edges: leaving
through one side re-enters through the opposite one.  It owns the agents
and the food; neither count changes after construction.
"""

import numpy as np

from agent import Agent
from config import AGENT_COUNT, FOOD_COUNT


def wrap_unit(value: float) -> float:
    """Wrap a coordinate into [0, 1)."""
    value = float(value) % 1.0
    # -1e-17 % 1.0 rounds up to exactly 1.0
    if value >= 1.0:
        value = 0.0
    return value


class Food:
    __slots__ = ("position",)

    def __init__(self, position):
        self.position = np.asarray(position, dtype=np.float64)

    @classmethod
    def random(cls, rng) -> "Food":
        return cls(rng.random(2))

    def relocate(self, rng):
        self.position = rng.random(2)

    def __repr__(self) -> str:
        return f"Food(x={self.position[0]:.3f}, y={self.position[1]:.3f})"


class World:
    """
    Holds every agent and food item of the simulation.
    """

    def __init__(self, agents: list, foods: list):
        self.agents = list(agents)
        self.foods  = list(foods)

    @classmethod
    def random(cls, rng, agent_count: int = AGENT_COUNT,
               food_count: int = FOOD_COUNT) -> "World":
        if agent_count < 1:
            raise ValueError(f"world needs at least one agent, got {agent_count}")
        if food_count < 0:
            raise ValueError(f"food count must be >= 0, got {food_count}")
        agents = [Agent.random(rng) for _ in range(agent_count)]
        foods  = [Food.random(rng) for _ in range(food_count)]
        return cls(agents, foods)

    # ──────────────────────────────────────────────────────────────────────────
    # Snapshot for rendering
    # ──────────────────────────────────────────────────────────────────────────

    def snapshot(self) -> dict:
        """
        Plain-data copy of everything a renderer needs:
          agents: list of {x, y, rotation}
          foods:  list of {x, y}
        """
        return {
            "agents": [
                {"x": float(a.position[0]), "y": float(a.position[1]),
                 "rotation": float(a.rotation)}
                for a in self.agents
            ],
            "foods": [
                {"x": float(f.position[0]), "y": float(f.position[1])}
                for f in self.foods
            ],
        }
