"""
Export functions for saving benchmark results to CSV and JSON.
"""

import csv
import json
import math
from typing import Any, Dict, List

SAMPLE_FIELDS = ['frame', 'prey_count', 'avg_speed', 'cohesion', 'avg_predator_speed']


def export_samples_to_csv(results: Dict[str, Any], filename: str = "flock_samples.csv") -> str:
    """
    Export the sampled time series of a benchmark run to CSV.

    Args:
        results: Results from BenchmarkSimulation.run_benchmark
        filename: Output filename

    Returns:
        Path to saved CSV file
    """
    with open(filename, 'w', newline='') as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=SAMPLE_FIELDS)
        writer.writeheader()

        for sample in results["samples"]:
            writer.writerow({
                'frame': sample['frame'],
                'prey_count': sample['prey_count'],
                'avg_speed': f"{sample['avg_speed']:.4f}",
                'cohesion': f"{sample['cohesion']:.4f}",
                'avg_predator_speed': f"{sample['avg_predator_speed']:.4f}",
            })

    return filename


def export_benchmark_report(results: Dict[str, Any], filename: str = "flock_benchmark_results.json") -> str:
    """
    Export full benchmark report to JSON.

    Args:
        results: Complete benchmark results dictionary
        filename: Output filename

    Returns:
        Path to saved JSON file
    """
    with open(filename, 'w') as f:
        json.dump(results, f, indent=2)

    return filename


def calculate_aggregate_stats(trial_results: List[Dict]) -> Dict[str, float]:
    """
    Calculate mean and standard deviation across trials.

    Args:
        trial_results: List of result dictionaries from multiple trials

    Returns:
        Dictionary with mean and std for each metric
    """
    if not trial_results:
        return {}

    metrics = ["mean_step_ms", "p95_step_ms", "max_step_ms", "avg_cohesion", "avg_speed",
               "elapsed_time_seconds"]

    aggregates = {}

    for metric in metrics:
        values = [r[metric] for r in trial_results if r.get(metric) is not None]
        if values:
            mean = sum(values) / len(values)
            aggregates[f"{metric}_mean"] = mean
            if len(values) > 1:
                variance = sum((x - mean) ** 2 for x in values) / (len(values) - 1)
                aggregates[f"{metric}_std"] = math.sqrt(variance)
            else:
                aggregates[f"{metric}_std"] = 0.0

    return aggregates
