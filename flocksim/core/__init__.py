"""
Core module containing configuration, environment collaborators, spatial index, and agent classes.
"""

from .config import SimulationConfig, DEFAULT_CONFIG, BENCHMARK_CONFIG, default_population
from .environment import Viewport, FixedClock, clamp_frame_time
from .spatial_index import SpatialIndex

__all__ = [
    'SimulationConfig', 'DEFAULT_CONFIG', 'BENCHMARK_CONFIG', 'default_population',
    'Viewport', 'FixedClock', 'clamp_frame_time', 'SpatialIndex',
]
