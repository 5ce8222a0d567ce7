import pytest

from flocksim.core.config import SimulationConfig
from flocksim.core.environment import Viewport


@pytest.fixture
def viewport():
    return Viewport(800, 600)


@pytest.fixture
def running_config():
    """Unpaused config with no predator and a small flock."""
    return SimulationConfig(paused=False, predator=False, population=0,
                            screenWidth=800, screenHeight=600)
