"""
Prometheus/OpenMetrics exporter for configuration validation.
Counts validation runs and violations and exports them for monitoring.
"""

import time
import logging
from typing import Optional
from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

from app_spec.report import ValidationReport

logger = logging.getLogger(__name__)

class MetricsExporter:
    """
    Collects validation metrics and exports them in Prometheus format.

    Each exporter owns its registry so several can coexist in one process.
    """

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry or CollectorRegistry()
        self._setup_prometheus_metrics()

    def _setup_prometheus_metrics(self):
        """Initialize Prometheus metric objects."""
        self.validations = Counter(
            'appspec_validations_total', 'Number of validation runs', ['result'],
            registry=self.registry
        )
        self.violations = Counter(
            'appspec_violations_total', 'Number of reported violations', ['kind'],
            registry=self.registry
        )
        self.decode_errors = Counter(
            'appspec_decode_errors_total', 'Number of configs that failed to decode',
            registry=self.registry
        )
        self.validation_duration = Histogram(
            'appspec_validation_duration_seconds', 'Validation duration',
            registry=self.registry
        )

    def record_validation(self, report: ValidationReport, started_at: Optional[float] = None):
        """Record the outcome of one validation run."""
        self.validations.labels(result="valid" if report.ok else "invalid").inc()
        for violation in report:
            self.violations.labels(kind=violation.kind.value).inc()
        if started_at is not None:
            self.validation_duration.observe(time.time() - started_at)

    def record_decode_error(self):
        self.decode_errors.inc()

    def export(self) -> bytes:
        """Render all metrics in Prometheus text format."""
        return generate_latest(self.registry)
