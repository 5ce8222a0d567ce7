"""
Benchmark simulation for performance testing and data collection.
"""

import logging
import random
import time
from typing import Any, Dict, Optional

import numpy as np

from .flock import FlockSimulation
from ..core.config import SimulationConfig, BENCHMARK_CONFIG
from ..core.environment import FixedClock, Viewport

logger = logging.getLogger(__name__)

# Default benchmark settings
DEFAULT_DT = 1.0 / 60.0
SAMPLE_INTERVAL = 10
PROGRESS_INTERVAL = 1000


class BenchmarkSimulation:
    """
    Headless fixed-timestep run of the flock for timing and statistics.

    Collects a time series of flock statistics and the wall-clock cost
    of each step.
    """

    def __init__(self, config: Optional[SimulationConfig] = None, dt: float = DEFAULT_DT,
                 sample_interval: int = SAMPLE_INTERVAL, seed: Optional[int] = None):
        """
        Initialize benchmark simulation.

        Args:
            config: Configuration (BENCHMARK_CONFIG with the population sized
                    from its screen if None)
            dt: Time step passed to every step
            sample_interval: Steps between recorded samples
            seed: Seed for the spawn positions, for comparable runs
        """
        if config is None:
            config = SimulationConfig.for_viewport(BENCHMARK_CONFIG.screenWidth, BENCHMARK_CONFIG.screenHeight,
                                                  paused=BENCHMARK_CONFIG.paused)
        self.config = config
        self.clock = FixedClock(dt)
        self.viewport = Viewport(config.screenWidth, config.screenHeight)
        self.sample_interval = max(1, sample_interval)

        if seed is not None:
            random.seed(seed)

        self.flock = FlockSimulation(self.viewport, config)
        self.step_times = []
        self.samples = []
        self.start_time = time.time()

    def _record_sample(self) -> None:
        stats = self.flock.stats
        self.samples.append({
            "frame": self.flock.frame_count,
            "prey_count": stats["prey_count"],
            "avg_speed": stats["avg_speed"],
            "cohesion": stats["flock_cohesion"],
            "avg_predator_speed": stats["avg_predator_speed"],
        })

    def run_benchmark(self, max_frames: int) -> Dict[str, Any]:
        """
        Run benchmark for specified number of frames.

        Args:
            max_frames: Number of steps to simulate

        Returns:
            Results dictionary with all statistics
        """
        logger.info("Running benchmark for %d frames with %d prey",
                    max_frames, self.config.target_prey_count())

        for frame in range(1, max_frames + 1):
            started = time.perf_counter()
            self.flock.step(self.config, self.clock.elapsed_since_last_step())
            self.step_times.append(time.perf_counter() - started)

            if frame % self.sample_interval == 0:
                self._record_sample()

            if frame % PROGRESS_INTERVAL == 0:
                elapsed = time.time() - self.start_time
                logger.info("Progress: %.1f%% (%d/%d frames, %.1fs elapsed)",
                            100.0 * frame / max_frames, frame, max_frames, elapsed)

        results = self.get_results()
        logger.info("Benchmark finished: %.3f ms/step", results["mean_step_ms"])
        return results

    def get_results(self) -> Dict[str, Any]:
        """
        Get benchmark results.

        Returns:
            Dictionary containing summary metrics and the sampled time series
        """
        times_ms = np.array(self.step_times) * 1000.0
        if len(times_ms):
            mean_ms = float(times_ms.mean())
            p95_ms = float(np.percentile(times_ms, 95))
            max_ms = float(times_ms.max())
        else:
            mean_ms = p95_ms = max_ms = 0.0

        cohesion = [s["cohesion"] for s in self.samples]
        speeds = [s["avg_speed"] for s in self.samples]

        return {
            "frames": self.flock.frame_count,
            "dt": self.clock.dt,
            "prey_count": len(self.flock.prey),
            "predator_count": len(self.flock.predators),
            "elapsed_time_seconds": time.time() - self.start_time,
            "mean_step_ms": mean_ms,
            "p95_step_ms": p95_ms,
            "max_step_ms": max_ms,
            "avg_cohesion": float(np.mean(cohesion)) if cohesion else 0.0,
            "avg_speed": float(np.mean(speeds)) if speeds else 0.0,
            "samples": self.samples,
            "config": self.config.to_dict(),
        }
