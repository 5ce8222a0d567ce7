"""
Boids flocking simulation with predator avoidance.

The core (flocksim.core, flocksim.simulation.flock) runs headless; the
pygame window in flocksim.simulation.interactive is only a host for it.
"""

__version__ = "0.1.0"
