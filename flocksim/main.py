"""
Main entry point for the flock simulation.

Run with:
    python -m flocksim.main              # Interactive simulation
    python -m flocksim.main --benchmark  # Headless benchmark
"""

import logging
import os
import sys


def run_interactive(config=None):
    """Run the interactive simulation with GUI."""
    from .simulation.interactive import Simulation

    print("=" * 60)
    print("Boids")
    print("=" * 60)
    print("\nControls:")
    print("  SPACE       - Start / pause")
    print("  P           - Toggle predator")
    print("  TAB         - Select parameter")
    print("  LEFT/RIGHT  - Decrease / increase selected parameter")
    print("  S           - Save settings to JSON")
    print("  ESC         - Quit")
    print("\nStarting simulation (paused)...")

    sim = Simulation(config)
    sim.run()


def run_benchmark(config, steps: int = 5000, dt: float = 1.0 / 60.0, trials: int = 1,
                  output_dir: str = ".", plot: bool = False):
    """
    Run the flock headless and export timing and flock statistics.

    Args:
        config: SimulationConfig for every trial
        steps: Steps per trial
        dt: Fixed time step
        trials: Number of trials
        output_dir: Directory for CSV/JSON/PNG output
        plot: Whether to plot the first trial
    """
    from .simulation.benchmark import BenchmarkSimulation
    from .analysis.export import export_samples_to_csv, export_benchmark_report, calculate_aggregate_stats

    config.paused = False

    print("=" * 60)
    print("FLOCK BENCHMARK")
    print("=" * 60)
    print(f"Prey: {config.target_prey_count()}  Predators: {config.target_predator_count()}")
    print(f"Steps per trial: {steps} (dt={dt:.4f})")
    print(f"Trials: {trials}")

    results = []
    for trial in range(trials):
        print(f"\nTrial {trial + 1}/{trials}")
        sim = BenchmarkSimulation(config, dt=dt, seed=42 + trial)
        result = sim.run_benchmark(steps)
        result["trial"] = trial + 1
        results.append(result)
        print(f"   {result['mean_step_ms']:.3f} ms/step (p95 {result['p95_step_ms']:.3f} ms), "
              f"cohesion {result['avg_cohesion']:.1f}")

    aggregates = calculate_aggregate_stats(results)

    try:
        os.makedirs(output_dir, exist_ok=True)
        csv_file = export_samples_to_csv(results[0], os.path.join(output_dir, "flock_samples.csv"))
        report_file = export_benchmark_report(
            {"trials": results, "aggregates": aggregates},
            os.path.join(output_dir, "flock_benchmark_results.json"),
        )
    except OSError as e:
        print(f"Error saving results: {e}")
        return results, aggregates

    print(f"\nCSV results saved to: {csv_file}")
    print(f"Benchmark report saved to: {report_file}")

    print("\n" + "=" * 60)
    print("BENCHMARK RESULTS SUMMARY")
    print("=" * 60)
    print(f"   Step time: {aggregates['mean_step_ms_mean']:.3f} ± {aggregates['mean_step_ms_std']:.3f} ms")
    print(f"   Cohesion: {aggregates['avg_cohesion_mean']:.2f} ± {aggregates['avg_cohesion_std']:.2f}")

    if plot:
        from .analysis.plotting import plot_flock_timeseries
        print("\nGenerating time-series plot...")
        plot_file = plot_flock_timeseries(results[0], os.path.join(output_dir, "flock_timeseries.png"))
        print(f"Plot saved to: {plot_file}")

    return results, aggregates


def build_config(args):
    """Build the configuration from command line arguments."""
    from .core.config import SimulationConfig

    if args.config:
        config = SimulationConfig.load(args.config)
    else:
        config = SimulationConfig.for_viewport(args.width, args.height)

    config.screenWidth = args.width
    config.screenHeight = args.height
    if args.population is not None:
        config.population = float(args.population)
    if args.no_predator:
        config.predator = False
    return config


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Boids flocking simulation")
    parser.add_argument("--benchmark", action="store_true", help="Run headless benchmark")
    parser.add_argument("--config", help="JSON settings file to start from")
    parser.add_argument("--width", type=int, default=1200, help="Viewport width")
    parser.add_argument("--height", type=int, default=650, help="Viewport height")
    parser.add_argument("--population", type=int, help="Prey count (default: sized from viewport)")
    parser.add_argument("--no-predator", action="store_true", help="Start without a predator")
    parser.add_argument("--steps", type=int, default=5000, help="Benchmark steps per trial")
    parser.add_argument("--dt", type=float, default=1.0 / 60.0, help="Benchmark time step")
    parser.add_argument("--trials", type=int, default=1, help="Number of benchmark trials")
    parser.add_argument("--output-dir", default=".", help="Directory for benchmark output")
    parser.add_argument("--plot", action="store_true", help="Plot benchmark time series")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")

    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = build_config(args)
    except (OSError, ValueError) as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        sys.exit(1)

    if args.benchmark:
        run_benchmark(config, steps=args.steps, dt=args.dt, trials=args.trials,
                      output_dir=args.output_dir, plot=args.plot)
    else:
        run_interactive(config)


if __name__ == "__main__":
    main()
