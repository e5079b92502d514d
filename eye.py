"""
Eye – the sensory organ of an agent.

The eye sees a cone in front of the agent, `fov_angle` wide and
`fov_range` deep, split into `cells` equal angular sectors
(photoreceptors).  Every food item inside the cone adds to the one cell
its bearing falls into; the closer the food, the stronger the reading:

    reading = (fov_range - distance) / fov_range     (1 at the eye, 0 at the edge)

Readings from several food items in the same cell are summed.

Angles follow the movement convention of the simulation: rotation 0
looks along +y and positive angles turn counter-clockwise.
"""

import math

import numpy as np

from config import EYE_CELLS, FOV_ANGLE, FOV_RANGE


def wrap_angle(angle: float) -> float:
    """Wrap an angle into [-pi, pi)."""
    return (angle + math.pi) % (2 * math.pi) - math.pi


class Eye:
    __slots__ = ("fov_range", "fov_angle", "cells")

    def __init__(self, fov_range: float = FOV_RANGE,
                 fov_angle: float = FOV_ANGLE,
                 cells: int = EYE_CELLS):
        if fov_range <= 0:
            raise ValueError(f"fov_range must be positive, got {fov_range}")
        if not 0 < fov_angle <= 2 * math.pi:
            raise ValueError(f"fov_angle must be in (0, 2*pi], got {fov_angle}")
        if cells < 1:
            raise ValueError(f"eye needs at least one cell, got {cells}")
        self.fov_range = float(fov_range)
        self.fov_angle = float(fov_angle)
        self.cells     = int(cells)

    # ──────────────────────────────────────────────────────────────────────────

    def process_vision(self, position, rotation: float, foods) -> list:
        """
        Args:
            position: (x, y) of the agent
            rotation: heading of the agent in radians
            foods:    iterable of Food (anything with a `.position`)

        Returns:
            list of `cells` floats, the brain's input vector
        """
        cells = np.zeros(self.cells, dtype=np.float64)
        px, py = float(position[0]), float(position[1])
        half_fov = self.fov_angle / 2

        for food in foods:
            dx = float(food.position[0]) - px
            dy = float(food.position[1]) - py
            dist = math.hypot(dx, dy)
            if dist >= self.fov_range:
                continue

            # bearing of the food measured from +y, relative to heading
            angle = wrap_angle(math.atan2(-dx, dy) - rotation)
            if angle < -half_fov or angle > half_fov:
                continue

            cell = int((angle + half_fov) / self.fov_angle * self.cells)
            cell = min(cell, self.cells - 1)

            cells[cell] += (self.fov_range - dist) / self.fov_range

        return [float(c) for c in cells]

    def __repr__(self) -> str:
        return (f"Eye(fov_range={self.fov_range}, "
                f"fov_angle={self.fov_angle:.4f}, cells={self.cells})")
