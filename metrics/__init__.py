"""
Metrics collection and export for configuration validation.
"""

from .exporter import MetricsExporter

__all__ = ['MetricsExporter']
