"""
Simulation module containing the flock step and its interactive and benchmark hosts.
"""

from .flock import FlockSimulation
from .benchmark import BenchmarkSimulation

__all__ = ['FlockSimulation', 'BenchmarkSimulation']
