"""
Boid (prey) agent class implementing flocking behavior.
"""

from typing import List, Sequence

import pygame

from .base import Agent, normalize_or_zero, perpendicular
from ..config import (
    PREY_COLOR, SEPARATION_SCALE, ALIGNMENT_SCALE, COHESION_SCALE,
    PREDATOR_AVOID_RADIUS, PREDATOR_AVOID_SCALE,
    FORCE_COLOR_SCALE, SPEED_COLOR_SCALE
)


class Boid(Agent):
    """
    A boid (prey) agent that exhibits flocking behavior.

    Implements Reynolds' boid rules over its nearest neighbours:
    - Separation: Push away from neighbours closer than the spacing goal
    - Alignment: Match neighbour velocities
    - Cohesion: Steer toward neighbour positions

    Also dodges sideways out of the path of nearby predators.
    """

    default_color = PREY_COLOR

    __slots__ = ()

    def neighbor_force(self, neighbors: List, boids: Sequence["Boid"], config) -> pygame.Vector2:
        """
        Average separation, alignment and cohesion over the neighbour set.

        The query point is the boid's own position, so the boid itself may
        be among the neighbours. Its offset is zero, so it contributes no
        force but still counts toward the average.

        Args:
            neighbors: (index, squared distance) pairs from the spatial index
            boids: Prey snapshot the index was built from
            config: SimulationConfig

        Returns:
            Averaged neighbour force, zero if there are no neighbours
        """
        force = pygame.Vector2(0, 0)
        if not neighbors:
            return force

        for index, dist_sq in neighbors:
            other = boids[index]
            dist = dist_sq ** 0.5
            offset = other.position - self.position

            # separation
            force += (min(dist - config.spacingGoal, 0.0)
                      * config.separationWeight
                      * SEPARATION_SCALE
                      * normalize_or_zero(offset))

            # alignment
            force += (other.velocity - self.velocity) * config.alignmentWeight * ALIGNMENT_SCALE

            # cohesion
            force += offset * config.cohesionWeight * COHESION_SCALE

        return force / len(neighbors)

    def predator_force(self, predators: Sequence[Agent]) -> pygame.Vector2:
        """
        Average sideways dodge from every predator within range.

        Args:
            predators: Predator snapshot

        Returns:
            Averaged predator force, zero if there are no predators
        """
        force = pygame.Vector2(0, 0)
        if not predators:
            return force

        for predator in predators:
            dist = self.position.distance_to(predator.position)
            side = perpendicular(predator.velocity)
            if side.dot(predator.position - self.position) <= 0:
                side = -side
            force += min(dist - PREDATOR_AVOID_RADIUS, 0.0) * side * PREDATOR_AVOID_SCALE

        return force / len(predators)

    def update(self, neighbors: List, boids: Sequence["Boid"], predators: Sequence[Agent],
               config, viewport, dt: float) -> "Boid":
        """
        Compute this boid's next state from the pre-step snapshot.

        Args:
            neighbors: Nearest prey as returned by SpatialIndex.k_nearest
            boids: Prey snapshot
            predators: Predator snapshot
            config: SimulationConfig
            viewport: Object with width() and height()
            dt: Elapsed time

        Returns:
            New Boid; self is left untouched
        """
        total_force = (self.neighbor_force(neighbors, boids, config)
                       + self.predator_force(predators)
                       + self.common_forces(config, viewport))

        color = (FORCE_COLOR_SCALE * total_force.length(),
                 SPEED_COLOR_SCALE * self.velocity.length(),
                 0.0,
                 1.0)
        return self.integrate(total_force, dt, color)
