"""Exporter: per-scrape orchestration and the Prometheus endpoint."""

from swarm_exporter.exporter.collector import SwarmServiceCollector, build_registry
from swarm_exporter.exporter.orchestrator import ScrapeResult, run_scrape
from swarm_exporter.exporter.server import make_wsgi_app, serve

__all__ = [
    "ScrapeResult",
    "SwarmServiceCollector",
    "build_registry",
    "make_wsgi_app",
    "run_scrape",
    "serve",
]
