"""Unit tests for Prometheus metric factories and exposition."""

import prometheus_client

from agentsea.platform.observability import BUCKETS, metrics
from agentsea.platform.observability.metrics import setup_counter, setup_histogram


class TestFactories:
    """Tests for histogram and counter factories."""

    def test_histogram_uses_shared_buckets(self):
        """Histograms are declared with the shared bucket layout."""
        registry = prometheus_client.CollectorRegistry()
        histogram = setup_histogram(registry, "test_duration_seconds", "Test", ("agent",))
        histogram.labels("a").observe(0.3)

        bounds = [
            sample.labels["le"]
            for sample in next(iter(registry.collect())).samples
            if sample.name == "test_duration_seconds_bucket"
        ]
        assert len(bounds) == len(BUCKETS)
        assert registry.get_sample_value("test_duration_seconds_count", {"agent": "a"}) == 1

    def test_counter(self):
        """Counters are registered with the given registry."""
        registry = prometheus_client.CollectorRegistry()
        counter = setup_counter(registry, "test_calls", "Test", ("agent",))
        counter.labels("a").inc(2)
        assert registry.get_sample_value("test_calls_total", {"agent": "a"}) == 2


class TestExposition:
    """Tests for the scrape output."""

    def test_metrics_output(self):
        """The default registry is rendered in the text exposition format."""
        body, content_type = metrics()
        assert content_type == prometheus_client.CONTENT_TYPE_LATEST
        assert b"agentsea_agent_run_duration_seconds" in body
