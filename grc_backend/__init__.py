"""Scoring and metrics backend for the ESG and resilience dashboards."""

__version__ = "0.1.0"
