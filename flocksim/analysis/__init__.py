"""
Analysis module for plotting and exporting benchmark results.
"""

from .export import export_samples_to_csv, export_benchmark_report, calculate_aggregate_stats

__all__ = [
    'export_samples_to_csv',
    'export_benchmark_report',
    'calculate_aggregate_stats',
]
