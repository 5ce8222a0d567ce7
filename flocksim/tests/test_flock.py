"""
Tests for FlockSimulation: reconciliation, pausing, and the per-frame step.
"""

import logging
import random

import pygame
import pytest

from flocksim.core.agents.base import boundary_force
from flocksim.core.agents.boid import Boid
from flocksim.core.agents.predator import Predator
from flocksim.core.config import SimulationConfig
from flocksim.core.environment import Viewport
from flocksim.simulation.flock import FlockSimulation


def test_initial_population_sized_from_viewport():
    viewport = Viewport(1000, 500)
    sim = FlockSimulation(viewport)

    assert len(sim.prey) == 300
    assert len(sim.predators) == 1


def test_initial_population_from_config(viewport):
    config = SimulationConfig(population=25, predator=False)
    sim = FlockSimulation(viewport, config)

    assert len(sim.prey) == 25
    assert len(sim.predators) == 0


def test_resize_up_spawns_agents_inside_viewport(viewport, running_config):
    sim = FlockSimulation(viewport, SimulationConfig(population=10, predator=False))
    before = sim.snapshot()["prey_positions"]

    running_config.paused = True
    running_config.population = 60
    sim.step(running_config, 0.05)

    assert len(sim.prey) == 60
    assert sim.snapshot()["prey_positions"][:10] == before
    for boid in sim.prey[10:]:
        assert 0 <= boid.position.x <= viewport.width()
        assert 0 <= boid.position.y <= viewport.height()


def test_resize_down_truncates_from_end(viewport, running_config):
    sim = FlockSimulation(viewport, SimulationConfig(population=20, predator=False))
    kept = list(sim.prey[:5])

    running_config.population = 5
    running_config.paused = True
    sim.step(running_config, 0.05)

    assert list(sim.prey) == kept


@pytest.mark.parametrize("population,expected", [
    (12.4, 12), (12.6, 13), (0.5, 1), (2.5, 3), (-8, 0), (-0.4, 0), (0, 0),
])
def test_population_target_rounded_and_clamped(viewport, running_config, population, expected):
    sim = FlockSimulation(viewport, SimulationConfig(population=3, predator=False))

    running_config.population = population
    sim.step(running_config, 0.05)

    assert len(sim.prey) == expected


def test_predator_toggle(viewport, running_config):
    sim = FlockSimulation(viewport, SimulationConfig(population=5, predator=False))
    running_config.population = 5
    running_config.paused = True

    running_config.predator = True
    sim.step(running_config, 0.05)
    assert len(sim.predators) == 1

    running_config.predator = False
    sim.step(running_config, 0.05)
    assert len(sim.predators) == 0


def test_predator_count_comes_from_config(viewport, running_config):
    sim = FlockSimulation(viewport, SimulationConfig(population=5, predator=False))
    running_config.population = 5
    running_config.predator = True
    running_config.predatorCount = 3

    sim.step(running_config, 0.05)

    assert len(sim.predators) == 3


def test_pause_leaves_state_unchanged(viewport):
    config = SimulationConfig(population=40, predator=True)
    sim = FlockSimulation(viewport, config)
    before = sim.snapshot()

    config.paused = True
    config.population = 55
    sim.step(config, 0.1)

    after = sim.snapshot()
    assert after["prey_positions"][:40] == before["prey_positions"]
    assert after["prey_velocities"][:40] == before["prey_velocities"]
    assert after["predator_positions"] == before["predator_positions"]
    assert after["predator_velocities"] == before["predator_velocities"]
    assert sim.frame_count == 0


def test_single_stationary_prey_feels_only_boundary(viewport, running_config):
    boid = Boid((20, 300), (0, 0))
    sim = FlockSimulation.from_agents(viewport, [boid])
    running_config.population = 1
    running_config.targetSpeed = 0.0
    dt = 0.05

    sim.step(running_config, dt)

    expected = boundary_force(pygame.Vector2(20, 300), viewport) * dt
    new = sim.prey[0]
    assert new.velocity.x == pytest.approx(expected.x)
    assert new.velocity.y == pytest.approx(expected.y)
    assert new.position.x == pytest.approx(20 + expected.x * dt)
    assert new.position.y == pytest.approx(300)


def test_single_stationary_prey_clear_of_margin_stays_put(viewport, running_config):
    sim = FlockSimulation.from_agents(viewport, [Boid((400, 300), (0, 0))])
    running_config.population = 1
    running_config.targetSpeed = 0.0

    sim.step(running_config, 0.05)

    assert sim.prey[0].velocity == pygame.Vector2(0, 0)
    assert sim.prey[0].position == pygame.Vector2(400, 300)


def test_close_prey_separate(viewport, running_config):
    a = Boid((400, 300), (0, 0))
    b = Boid((410, 300), (0, 0))
    sim = FlockSimulation.from_agents(viewport, [a, b])
    running_config.population = 2
    running_config.cohesionWeight = 0.0
    running_config.alignmentWeight = 0.0
    running_config.separationWeight = 5.0
    running_config.spacingGoal = 40.0

    sim.step(running_config, 0.05)

    new_a, new_b = sim.prey
    assert new_a.velocity.x < 0
    assert new_b.velocity.x > 0
    assert new_a.velocity.y == pytest.approx(0.0)
    assert new_b.velocity.y == pytest.approx(0.0)
    assert new_a.position.distance_to(new_b.position) > 10


def test_step_replaces_agents_without_mutating_snapshot(viewport, running_config):
    prey = [Boid((100 + 20 * i, 200 + 10 * i), (i, -i)) for i in range(8)]
    predator = Predator((300, 300), (10, 0))
    sim = FlockSimulation.from_agents(viewport, prey, [predator])
    running_config.population = 8
    running_config.predator = True

    sim.step(running_config, 0.05)

    for i, boid in enumerate(prey):
        assert boid.position == pygame.Vector2(100 + 20 * i, 200 + 10 * i)
        assert sim.prey[i] is not boid
    assert predator.position == pygame.Vector2(300, 300)
    assert sim.predators[0] is not predator


def test_next_state_independent_of_update_order(viewport, running_config):
    rng = random.Random(3)
    prey = [Boid((rng.uniform(60, 740), rng.uniform(60, 540)), (rng.uniform(-50, 50), rng.uniform(-50, 50)))
            for _ in range(30)]
    predators = [Predator((300, 250), (15, -5))]
    sim = FlockSimulation.from_agents(viewport, prey, predators)
    running_config.population = 30
    running_config.predator = True
    dt = 0.05

    sim.step(running_config, dt)

    for i in reversed(range(len(prey))):
        neighbors = sim.index.k_nearest(prey[i].position, 6)
        expected = prey[i].update(neighbors, prey, predators, running_config, viewport, dt)
        assert sim.prey[i].position.x == pytest.approx(expected.position.x)
        assert sim.prey[i].position.y == pytest.approx(expected.position.y)

    neighbors = sim.index.k_nearest(predators[0].position, 6)
    expected = predators[0].update(neighbors, prey, running_config, viewport, dt)
    assert sim.predators[0].velocity.x == pytest.approx(expected.velocity.x)
    assert sim.predators[0].velocity.y == pytest.approx(expected.velocity.y)


def test_predator_drawn_toward_prey(viewport, running_config):
    prey = [Boid((500, 300), (0, 0))]
    predator = Predator((400, 300), (0, 0))
    sim = FlockSimulation.from_agents(viewport, prey, [predator])
    running_config.population = 1
    running_config.predator = True
    running_config.cohesionWeight = 5.0
    dt = 0.05

    sim.step(running_config, dt)

    assert sim.predators[0].velocity.x == pytest.approx(100 * 5 * 0.02 * dt)
    assert sim.predators[0].velocity.y == pytest.approx(0.0)


def test_elapsed_time_is_clamped(viewport, running_config):
    def make():
        return FlockSimulation.from_agents(viewport, [Boid((20, 20), (5, 5)), Boid((60, 40), (-5, 0))])

    running_config.population = 2
    long_frame = make()
    capped_frame = make()

    long_frame.step(running_config, 3.0)
    capped_frame.step(running_config, 0.1)

    assert long_frame.snapshot() == capped_frame.snapshot()


def test_negative_elapsed_time_moves_nothing(viewport, running_config):
    sim = FlockSimulation.from_agents(viewport, [Boid((20, 20), (5, 5))])
    running_config.population = 1

    sim.step(running_config, -1.0)

    assert sim.prey[0].position == pygame.Vector2(20, 20)


def test_empty_flock_steps_cleanly(viewport, running_config):
    sim = FlockSimulation.from_agents(viewport, [], [Predator((100, 100), (3, 4))])
    running_config.predator = True

    sim.step(running_config, 0.05)

    assert len(sim.prey) == 0
    assert len(sim.predators) == 1
    assert len(sim.index) == 0
    assert sim.stats["avg_speed"] == 0.0


def test_statistics_after_step(viewport, running_config):
    sim = FlockSimulation(viewport, SimulationConfig(population=30, predator=True))
    running_config.population = 30
    running_config.predator = True

    sim.step(running_config, 0.02)

    assert sim.frame_count == 1
    assert sim.stats["prey_count"] == 30
    assert sim.stats["predator_count"] == 1
    assert sim.stats["avg_speed"] > 0
    assert sim.stats["flock_cohesion"] > 0


def test_many_steps_stay_finite(viewport):
    config = SimulationConfig(population=80, predator=True, paused=False)
    sim = FlockSimulation(viewport, config)

    for _ in range(50):
        sim.step(config, 1.0 / 60.0)

    for boid in sim.prey:
        assert boid.position.x == boid.position.x
        assert abs(boid.position.x) < 1e6 and abs(boid.position.y) < 1e6


def test_from_agents_logs_the_agents_it_holds(viewport, caplog):
    prey = [Boid((100, 100), (1, 0)), Boid((200, 200), (0, 1))]

    with caplog.at_level(logging.INFO, logger="flocksim.simulation.flock"):
        sim = FlockSimulation.from_agents(viewport, prey, [Predator((300, 300), (0, 0))])

    assert list(sim.prey) == prey
    messages = [r.getMessage() for r in caplog.records]
    assert any("2 prey and 1 predators" in m for m in messages)
    assert not any("0 prey" in m for m in messages)
