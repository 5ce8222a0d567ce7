"""
Base Agent class for all simulation entities.
"""

import math
import random
from typing import Tuple

import pygame

from ..config import (
    TARGET_SPEED_SCALE, SPEED_FORCE_SCALE,
    BOUNDARY_MARGIN, BOUNDARY_WEIGHT, SPAWN_SPEED
)

Color = Tuple[float, float, float, float]


def normalize_or_zero(vector: pygame.Vector2) -> pygame.Vector2:
    """Unit vector in the direction of vector, or zero for a zero vector."""
    length = vector.length()
    if length == 0:
        return pygame.Vector2(0, 0)
    return vector / length


def perpendicular(vector: pygame.Vector2) -> pygame.Vector2:
    """Vector rotated 90 degrees counter-clockwise."""
    return pygame.Vector2(-vector.y, vector.x)


def speed_force(velocity: pygame.Vector2, config) -> pygame.Vector2:
    """
    Steer speed toward the configured target while keeping direction.

    Args:
        velocity: Current velocity
        config: SimulationConfig

    Returns:
        Speed matching force (zero for a stationary agent)
    """
    target = config.targetSpeed * TARGET_SPEED_SCALE
    return (normalize_or_zero(velocity)
            * (target - velocity.length())
            * config.speedWeight
            * SPEED_FORCE_SCALE)


def boundary_force(position: pygame.Vector2, viewport) -> pygame.Vector2:
    """
    Soft push back inside the viewport when within the margin of an edge.

    Args:
        position: Current position
        viewport: Object with width() and height()

    Returns:
        Boundary force, zero when clear of every margin
    """
    fx = (max(BOUNDARY_MARGIN - position.x, 0.0)
          + min(viewport.width() - BOUNDARY_MARGIN - position.x, 0.0))
    fy = (max(BOUNDARY_MARGIN - position.y, 0.0)
          + min(viewport.height() - BOUNDARY_MARGIN - position.y, 0.0))
    return pygame.Vector2(fx, fy) * BOUNDARY_WEIGHT


class Agent:
    """
    Base class for all agents in the simulation.

    Agents are values: an update never mutates the agent, it returns the
    agent's next state as a new instance.
    """

    default_color: Color = (0.0, 0.0, 0.0, 1.0)

    __slots__ = ("position", "velocity", "color")

    def __init__(self, position, velocity, color: Color = None):
        """
        Initialize an agent.

        Args:
            position: Initial position (x, y)
            velocity: Initial velocity (x, y)
            color: RGBA display colour, defaults to the variant's colour
        """
        self.position = pygame.Vector2(position)
        self.velocity = pygame.Vector2(velocity)
        self.color = self.default_color if color is None else color

    @classmethod
    def spawn(cls, viewport) -> "Agent":
        """
        Create an agent at a random position inside the viewport.

        Args:
            viewport: Object with width() and height()

        Returns:
            New agent with a random velocity of up to SPAWN_SPEED per axis
        """
        position = (random.uniform(0, viewport.width()),
                    random.uniform(0, viewport.height()))
        velocity = (random.uniform(-SPAWN_SPEED, SPAWN_SPEED),
                    random.uniform(-SPAWN_SPEED, SPAWN_SPEED))
        return cls(position, velocity)

    def common_forces(self, config, viewport) -> pygame.Vector2:
        """Speed matching plus boundary containment."""
        return speed_force(self.velocity, config) + boundary_force(self.position, viewport)

    def integrate(self, force: pygame.Vector2, dt: float, color: Color = None) -> "Agent":
        """
        Semi-implicit Euler step.

        Args:
            force: Total force acting this step
            dt: Elapsed time
            color: Colour for the new state (variant default if None)

        Returns:
            New agent of the same class
        """
        velocity = self.velocity + force * dt
        return type(self)(self.position + velocity * dt, velocity, color)

    @property
    def heading(self) -> float:
        """Velocity angle in radians, used to orient the drawn shape."""
        return math.atan2(self.velocity.y, self.velocity.x)

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(position=({self.position.x:.2f}, {self.position.y:.2f}), "
                f"velocity=({self.velocity.x:.2f}, {self.velocity.y:.2f}))")
