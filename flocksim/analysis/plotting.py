"""
Plotting functions for visualizing benchmark results.
"""

from typing import Any, Dict

import matplotlib.pyplot as plt


def plot_flock_timeseries(results: Dict[str, Any], output_file: str = "flock_timeseries.png",
                          show: bool = False) -> str:
    """
    Plot flock cohesion and mean speed over time for one benchmark run.

    Args:
        results: Results from BenchmarkSimulation.run_benchmark
        output_file: Output filename for the plot
        show: Open an interactive window after saving

    Returns:
        Path to saved plot file
    """
    samples = results["samples"]
    frames = [s["frame"] for s in samples]
    cohesion = [s["cohesion"] for s in samples]
    speed = [s["avg_speed"] for s in samples]

    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(12, 7), sharex=True)

    ax1.plot(frames, cohesion, linewidth=2, color='#4ECDC4')
    ax1.set_ylabel('Mean Distance to Centroid', fontsize=12, fontweight='bold')
    ax1.grid(True, alpha=0.3, linestyle='--')

    ax2.plot(frames, speed, linewidth=2, color='#FF6B6B', label='Prey')
    predator_speed = [s["avg_predator_speed"] for s in samples]
    if any(predator_speed):
        ax2.plot(frames, predator_speed, linewidth=2, color='#333333', label='Predators')
        ax2.legend(fontsize=11, loc='lower right', framealpha=0.9)
    ax2.set_xlabel('Frame Number', fontsize=12, fontweight='bold')
    ax2.set_ylabel('Mean Speed', fontsize=12, fontweight='bold')
    ax2.grid(True, alpha=0.3, linestyle='--')

    fig.suptitle(f"Flock of {results['prey_count']}: Cohesion and Speed Over Time",
                 fontsize=14, fontweight='bold')
    fig.tight_layout()
    fig.savefig(output_file, dpi=150, bbox_inches='tight')

    if show:
        plt.show()
    plt.close(fig)
    return output_file
