"""Prometheus metric factories.

This module provides the shared bucket layout and helpers used to declare
histograms and counters for agent, tool and workflow instrumentation.
"""

import prometheus_client

BUCKETS = (
    # these are log spaced with 1 sig-fig rounding so there are 3 per decade
    # 3 div/decade = 1,   2.15,   4.64,   10
    0.001,  # 1 ms
    0.002,
    0.005,
    0.01,
    0.02,
    0.05,
    0.1,
    0.2,
    0.5,
    1,
    2,
    5,
    10,
    20,
    50,
    100,  # long tool chains with several model round-trips
    float("inf"),
)


def setup_histogram(registry, name, documentation, labelnames):
    """Create a Prometheus histogram with standard bucket configuration.

    Args:
        registry: Prometheus registry to register the metric with
        name: Metric name (e.g., "agentsea_agent_run_duration_seconds")
        documentation: Human-readable metric description
        labelnames: Tuple of label names for the histogram

    Returns:
        Configured Prometheus Histogram instance
    """
    return prometheus_client.Histogram(
        name=name,
        documentation=documentation,
        labelnames=labelnames,
        registry=registry,
        buckets=BUCKETS,
    )


def setup_counter(registry, name, documentation, labelnames):
    """Create a Prometheus counter.

    Args:
        registry: Prometheus registry to register the metric with
        name: Metric name without the "_total" suffix
        documentation: Human-readable metric description
        labelnames: Tuple of label names for the counter

    Returns:
        Configured Prometheus Counter instance
    """
    return prometheus_client.Counter(
        name=name,
        documentation=documentation,
        labelnames=labelnames,
        registry=registry,
    )


def metrics() -> tuple[bytes, str]:
    """Generate Prometheus metrics output for a scrape endpoint.

    Returns:
        Tuple of (metrics_body, content_type)
    """
    return (
        prometheus_client.generate_latest(prometheus_client.REGISTRY),
        prometheus_client.CONTENT_TYPE_LATEST,
    )
