"""Roll swarm tasks up into one snapshot per service."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from swarm_exporter.aggregation.models import RUNNING, ServiceSnapshot
from swarm_exporter.observation.models import EPOCH, Service, Task

logger = logging.getLogger(__name__)


def group_tasks_by_service(services: Iterable[Service], tasks: Iterable[Task]) -> dict[str, list[Task]]:
    """
    Group tasks by owning service ID in a single pass.

    Tasks whose service ID is not among ``services`` are orphans (the service
    was removed, or created, between the two listings) and are dropped.
    """
    known_ids = {s.id for s in services}
    grouped: dict[str, list[Task]] = {}
    orphans = 0
    for task in tasks:
        if task.service_id not in known_ids:
            orphans += 1
            continue
        grouped.setdefault(task.service_id, []).append(task)
    if orphans:
        logger.debug("Dropped %d orphan task(s) with no matching service", orphans)
    return grouped


def summarize_service(service: Service, tasks: Iterable[Task]) -> ServiceSnapshot:
    """Build the snapshot of a single service from the tasks it owns."""
    counts: dict[str, int] = {RUNNING: 0}
    last_change = EPOCH
    for task in tasks:
        counts[task.state] = counts.get(task.state, 0) + 1
        if task.state_timestamp > last_change:
            last_change = task.state_timestamp
    return ServiceSnapshot(
        name=service.name,
        desired_replicas=service.mode.desired_replicas,
        task_state_counts=counts,
        image=service.image,
        last_change_time=last_change,
    )


def aggregate(services: Sequence[Service], tasks: Iterable[Task]) -> list[ServiceSnapshot]:
    """Return one snapshot per service, in the order the services were listed."""
    grouped = group_tasks_by_service(services, tasks)
    return [summarize_service(service, grouped.get(service.id, ())) for service in services]
