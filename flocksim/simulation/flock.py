"""
Headless flock simulation: population management and the per-frame step.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..core.agents.boid import Boid
from ..core.agents.predator import Predator
from ..core.config import SimulationConfig, NEIGHBOR_COUNT
from ..core.environment import clamp_frame_time
from ..core.spatial_index import SpatialIndex

logger = logging.getLogger(__name__)


def _resize(agents: List, target: int, factory, viewport) -> List:
    """Truncate from the end or append freshly spawned agents."""
    if len(agents) > target:
        return agents[:target]
    return agents + [factory.spawn(viewport) for _ in range(target - len(agents))]


class FlockSimulation:
    """
    Prey and predator populations advanced one step at a time.

    Every agent's next state is computed from the same pre-step snapshot;
    the new populations replace the old ones only once all of them have
    been computed.
    """

    def __init__(self, viewport, config: Optional[SimulationConfig] = None,
                 prey: Optional[Sequence[Boid]] = None, predators: Optional[Sequence[Predator]] = None):
        """
        Initialize the simulation.

        Args:
            viewport: Object with width() and height()
            config: Initial configuration used to size the populations
                    (population sized from the viewport if None)
            prey: Starting prey, replacing the randomly spawned ones
            predators: Starting predators, replacing the randomly spawned ones
        """
        self.viewport = viewport
        if config is None:
            config = SimulationConfig.for_viewport(viewport.width(), viewport.height())

        if prey is None:
            prey = [Boid.spawn(viewport) for _ in range(config.target_prey_count())]
        if predators is None:
            predators = [Predator.spawn(viewport) for _ in range(config.target_predator_count())]

        self._boids: Tuple[Boid, ...] = tuple(prey)
        self._predators: Tuple[Predator, ...] = tuple(predators)
        self.index = SpatialIndex.build([])
        self.frame_count = 0

        self.stats = {
            "prey_count": len(self._boids),
            "predator_count": len(self._predators),
            "avg_speed": 0.0,
            "flock_cohesion": 0.0,
            "avg_predator_speed": 0.0,
        }

        logger.info("Created flock of %d prey and %d predators in %r",
                    len(self._boids), len(self._predators), viewport)

    @classmethod
    def from_agents(cls, viewport, prey: Sequence[Boid],
                    predators: Sequence[Predator] = ()) -> "FlockSimulation":
        """Create a simulation holding the given agents instead of random ones."""
        sim = cls(viewport, prey=prey, predators=predators)
        sim._update_statistics()
        return sim

    @property
    def prey(self) -> Sequence[Boid]:
        """Current prey, read-only."""
        return self._boids

    @property
    def predators(self) -> Sequence[Predator]:
        """Current predators, read-only."""
        return self._predators

    def reconcile(self, config: SimulationConfig) -> None:
        """Resize both populations to match the configuration."""
        prey_target = config.target_prey_count()
        if len(self._boids) != prey_target:
            logger.debug("Resizing prey %d -> %d", len(self._boids), prey_target)
            self._boids = tuple(_resize(list(self._boids), prey_target, Boid, self.viewport))

        predator_target = config.target_predator_count()
        if len(self._predators) != predator_target:
            logger.debug("Resizing predators %d -> %d", len(self._predators), predator_target)
            self._predators = tuple(_resize(list(self._predators), predator_target, Predator, self.viewport))

    def step(self, config: SimulationConfig, elapsed: float) -> None:
        """
        Advance the simulation by one frame.

        Populations are reconciled even while paused; nothing moves.

        Args:
            config: Settings for this step (read only)
            elapsed: Time since the previous step, clamped to MAX_FRAME_TIME
        """
        self.reconcile(config)

        if config.paused:
            return

        dt = clamp_frame_time(elapsed)
        boids = self._boids
        predators = self._predators

        self.index = SpatialIndex.build(b.position for b in boids)
        logger.debug("Frame %d: rebuilt index over %d prey", self.frame_count + 1, len(self.index))

        prey_neighbors = self.index.k_nearest_batch((b.position for b in boids), NEIGHBOR_COUNT)
        new_boids = tuple(
            boid.update(neighbors, boids, predators, config, self.viewport, dt)
            for boid, neighbors in zip(boids, prey_neighbors)
        )

        predator_neighbors = self.index.k_nearest_batch((p.position for p in predators), NEIGHBOR_COUNT)
        new_predators = tuple(
            predator.update(neighbors, boids, config, self.viewport, dt)
            for predator, neighbors in zip(predators, predator_neighbors)
        )

        self._boids = new_boids
        self._predators = new_predators
        self.frame_count += 1
        self._update_statistics()

    def _update_statistics(self) -> None:
        """Update simulation statistics."""
        self.stats["prey_count"] = len(self._boids)
        self.stats["predator_count"] = len(self._predators)

        if self._boids:
            positions = np.array([(b.position.x, b.position.y) for b in self._boids])
            velocities = np.array([(b.velocity.x, b.velocity.y) for b in self._boids])
            centroid = positions.mean(axis=0)
            self.stats["avg_speed"] = float(np.linalg.norm(velocities, axis=1).mean())
            self.stats["flock_cohesion"] = float(np.linalg.norm(positions - centroid, axis=1).mean())
        else:
            self.stats["avg_speed"] = 0.0
            self.stats["flock_cohesion"] = 0.0

        if self._predators:
            speeds = [p.velocity.length() for p in self._predators]
            self.stats["avg_predator_speed"] = sum(speeds) / len(speeds)
        else:
            self.stats["avg_predator_speed"] = 0.0

    def snapshot(self) -> Dict[str, List[Tuple[float, float]]]:
        """Plain copies of positions and velocities, for comparisons and export."""
        return {
            "prey_positions": [(b.position.x, b.position.y) for b in self._boids],
            "prey_velocities": [(b.velocity.x, b.velocity.y) for b in self._boids],
            "predator_positions": [(p.position.x, p.position.y) for p in self._predators],
            "predator_velocities": [(p.velocity.x, p.velocity.y) for p in self._predators],
        }
