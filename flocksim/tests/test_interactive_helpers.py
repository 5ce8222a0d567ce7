import math

import pytest

from flocksim.core.agents.boid import Boid
from flocksim.core.config import SimulationConfig
from flocksim.simulation.interactive import adjust_parameter, to_rgba, triangle_points


def test_to_rgba_clamps_channels():
    assert to_rgba((1.2, 0.5, -0.1, 1.0)) == (255, 128, 0, 255)


def test_triangle_points_along_heading():
    boid = Boid((100, 100), (0, 10))

    tip, left, right = triangle_points(boid, 8)

    assert tip == pytest.approx((100, 108))
    assert left == pytest.approx((100 + 8 * math.cos(math.pi / 2 - 2.4), 100 + 8 * math.sin(math.pi / 2 - 2.4)))
    assert right == pytest.approx((100 + 8 * math.cos(math.pi / 2 + 2.4), 100 + 8 * math.sin(math.pi / 2 + 2.4)))


def test_adjust_parameter_stays_in_range():
    config = SimulationConfig(separationWeight=9.8)

    assert adjust_parameter(config, "separationWeight", +1) == 10.0
    assert adjust_parameter(config, "separationWeight", +1) == 10.0
    assert adjust_parameter(config, "separationWeight", -1) == pytest.approx(9.5)


def test_adjust_population_rounds():
    config = SimulationConfig(population=0.0)

    assert adjust_parameter(config, "population", -1) == 0.0
    assert adjust_parameter(config, "population", +1) == 100.0
    assert config.population == 100.0
