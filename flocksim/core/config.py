"""
Configuration classes and defaults for the flock simulation.
"""

import json
import math
from dataclasses import dataclass, field, fields
from typing import Dict, List, Tuple


# Population density used to size the default flock from the viewport
POPULATION_DENSITY = 0.0006


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


def default_population(width: float, height: float) -> int:
    """Default prey count for a viewport of the given size."""
    return round_half_up(width * height * POPULATION_DENSITY)


@dataclass
class SimulationConfig:
    """
    Mutable settings read by the simulation once per step.

    The control surface may change any field between steps; the simulation
    never writes to it.
    """

    # Run state
    paused: bool = True
    predator: bool = True
    predatorCount: int = 1

    # Flock size (fractional values are rounded when reconciling),
    # sized for the default screen
    population: float = float(default_population(1200, 650))

    # Flocking parameters
    spacingGoal: float = 40.0
    separationWeight: float = 5.0
    cohesionWeight: float = 5.0
    alignmentWeight: float = 5.0
    targetSpeed: float = 5.0
    speedWeight: float = 5.0

    # Host window settings
    screenWidth: int = 1200
    screenHeight: int = 650
    fpsTarget: int = 60
    backgroundColor: List[int] = field(default_factory=lambda: [255, 255, 255])

    # Output
    settingsOutputFile: str = "flock_settings.json"

    def target_prey_count(self) -> int:
        """Prey count the population should be reconciled to."""
        return max(0, round_half_up(self.population))

    def target_predator_count(self) -> int:
        """Predator count the population should be reconciled to."""
        if not self.predator:
            return 0
        return max(0, round_half_up(self.predatorCount))

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict) -> "SimulationConfig":
        """Create config from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def for_viewport(cls, width: float, height: float, **overrides) -> "SimulationConfig":
        """Create a config whose population is sized from the viewport."""
        config = cls(screenWidth=int(width), screenHeight=int(height),
                     population=float(default_population(width, height)))
        for key, value in overrides.items():
            setattr(config, key, value)
        return config

    def save(self, path: str) -> str:
        """Write the config to a JSON file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=4)
        return path

    @classmethod
    def load(cls, path: str) -> "SimulationConfig":
        """
        Read a config from a JSON file.

        Raises:
            FileNotFoundError: if the file does not exist
            ValueError: if the file is not a JSON object
        """
        with open(path) as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a JSON object, got {type(data).__name__}")
        return cls.from_dict(data)


# Control panel ranges for the adjustable parameters
PARAMETER_RANGES: Dict[str, Tuple[float, float]] = {
    "population": (0.0, 2000.0),
    "spacingGoal": (0.0, 100.0),
    "separationWeight": (0.0, 10.0),
    "cohesionWeight": (0.0, 10.0),
    "alignmentWeight": (0.0, 10.0),
    "targetSpeed": (0.0, 10.0),
    "speedWeight": (0.0, 10.0),
}


# Default configuration for the interactive simulation
DEFAULT_CONFIG = SimulationConfig()

# Configuration for headless benchmarking (starts running immediately),
# population sized for the default screen like DEFAULT_CONFIG
BENCHMARK_CONFIG = SimulationConfig(paused=False)


# Neighbour query size
NEIGHBOR_COUNT = 6

# Prey rule scale factors
SEPARATION_SCALE = 8.0
ALIGNMENT_SCALE = 0.15
COHESION_SCALE = 0.4

# Predator interaction
PREDATOR_AVOID_RADIUS = 120.0
PREDATOR_AVOID_SCALE = 0.05
PREDATOR_ATTRACTION_SCALE = 0.02

# Speed matching
TARGET_SPEED_SCALE = 15.0
SPEED_FORCE_SCALE = 0.4

# Boundary margin for repulsion
BOUNDARY_MARGIN = 50.0
BOUNDARY_WEIGHT = 5.0

# Largest time step integrated in one frame
MAX_FRAME_TIME = 0.1

# Spawn velocity range per axis
SPAWN_SPEED = 50.0

# Display colours (RGBA, 0..1)
PREY_COLOR = (0.31, 0.31, 0.31, 1.0)
PREDATOR_COLOR = (0.0, 0.0, 0.0, 1.0)

# Colour mapping for prey diagnostics
FORCE_COLOR_SCALE = 0.008
SPEED_COLOR_SCALE = 0.01
