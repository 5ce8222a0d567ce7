"""
Predator agent class implementing prey-seeking behavior.
"""

from typing import List, Sequence

import pygame

from .base import Agent
from ..config import PREDATOR_COLOR, PREDATOR_ATTRACTION_SCALE


class Predator(Agent):
    """
    A predator agent drawn gently toward the nearest prey.

    Ignores the flocking rules and other predators; only the shared speed
    and boundary forces act on it besides the attraction.
    """

    default_color = PREDATOR_COLOR

    __slots__ = ()

    def attraction_force(self, neighbors: List, boids: Sequence[Agent], config) -> pygame.Vector2:
        """
        Summed pull toward each of the nearest prey.

        Args:
            neighbors: (index, squared distance) pairs from the spatial index
            boids: Prey snapshot the index was built from
            config: SimulationConfig

        Returns:
            Attraction force (not averaged)
        """
        force = pygame.Vector2(0, 0)
        for index, _ in neighbors:
            force += (boids[index].position - self.position) * config.cohesionWeight * PREDATOR_ATTRACTION_SCALE
        return force

    def update(self, neighbors: List, boids: Sequence[Agent], config, viewport, dt: float) -> "Predator":
        """Compute this predator's next state from the pre-step snapshot."""
        total_force = self.attraction_force(neighbors, boids, config) + self.common_forces(config, viewport)
        return self.integrate(total_force, dt)
