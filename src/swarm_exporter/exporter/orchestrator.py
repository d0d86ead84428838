"""Orchestrator: fetch → aggregate, once per scrape."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

from swarm_exporter.aggregation import ServiceSnapshot, aggregate
from swarm_exporter.errors import FetchError
from swarm_exporter.observation import ClusterFetcher

logger = logging.getLogger(__name__)


@dataclass
class ScrapeResult:
    """Outcome of one scrape: snapshots on success, the fetch error otherwise."""

    snapshots: list[ServiceSnapshot] = field(default_factory=list)
    error: FetchError | None = None
    duration_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None


def run_scrape(fetcher: ClusterFetcher) -> ScrapeResult:
    """
    List services and tasks, then aggregate them into per-service snapshots.

    A fetch failure is returned in the result rather than raised; the two
    listings are independent reads, so tasks of services created or removed
    in between are tolerated by the aggregation.
    """
    started = time.perf_counter()
    try:
        services = fetcher.list_services()
        tasks = fetcher.list_tasks()
    except FetchError as e:
        return ScrapeResult(error=e, duration_seconds=time.perf_counter() - started)

    snapshots = aggregate(services, tasks)
    duration = time.perf_counter() - started
    logger.debug(
        "Scraped %d service(s) from %d task(s) in %.3fs",
        len(snapshots),
        len(tasks),
        duration,
    )
    return ScrapeResult(snapshots=snapshots, duration_seconds=duration)
