"""Prometheus exporter for Docker Swarm services and tasks."""

__version__ = "0.1.0"
