"""
Agent classes for the boids simulation.
"""

from .base import Agent
from .boid import Boid
from .predator import Predator

__all__ = ['Agent', 'Boid', 'Predator']

