"""Sprint Metrics - agile team performance metrics from sprint and task data.

This package provides a metrics engine (normalization, aggregation, ranking
and trend analysis) and calculators that turn a snapshot of sprints and
tasks into velocity, bug ratio, workload, trend and audit reports.
"""
