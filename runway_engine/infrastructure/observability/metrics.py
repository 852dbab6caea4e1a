"""Prometheus metrics for monitoring analysis volume, risk distribution and latency"""

from prometheus_client import Counter, Histogram

# Analysis metrics
analysis_counter = Counter(
    "runway_analysis_total",
    "Total health analyses run",
    ["trend"],  # Increasing | Decreasing | Stable
)

salary_detection_counter = Counter(
    "runway_salary_detection_total",
    "Pay-cycle anchors by detection method",
    ["source"],  # keyword | fallback | assumed
)

survival_probability_histogram = Histogram(
    "runway_survival_probability_percent",
    "Distribution of survival probabilities reported",
    buckets=[5, 25, 50, 75, 90, 95, 99, 100],
)

analysis_duration_histogram = Histogram(
    "runway_analysis_duration_seconds",
    "Time spent building a health report",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

# Simulation / subscription metrics
simulation_counter = Counter(
    "runway_simulation_total",
    "What-if simulations run",
)

price_creep_counter = Counter(
    "runway_price_creep_detected_total",
    "Subscription price increases detected",
)


def record_analysis(trend: str, salary_source: str, runway_probability: float, duration_seconds: float) -> None:
    """Record one completed analysis"""
    analysis_counter.labels(trend=trend).inc()
    salary_detection_counter.labels(source=salary_source).inc()
    survival_probability_histogram.observe(runway_probability)
    analysis_duration_histogram.observe(duration_seconds)
