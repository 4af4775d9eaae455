"""Analytical capacity, latency and failure-injection simulator for architecture sketches."""

__version__ = "0.1.0"
