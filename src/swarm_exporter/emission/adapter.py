"""Flatten service snapshots into labeled gauge samples."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import NamedTuple

from prometheus_client.core import GaugeMetricFamily

from swarm_exporter.aggregation.models import ServiceSnapshot
from swarm_exporter.emission.schema import (
    CHANGE_TIME,
    DESIRED_REPLICAS,
    INFO,
    SERVICE_METRICS,
    TASKS,
    MetricSchema,
)


class Sample(NamedTuple):
    """One gauge value with its label values, in schema label order."""

    metric: str
    labels: tuple[str, ...]
    value: float


def iter_samples(snapshots: Iterable[ServiceSnapshot]) -> Iterator[Sample]:
    """Yield the samples of each snapshot, preserving snapshot order."""
    for snap in snapshots:
        if snap.desired_replicas is not None:
            yield Sample(DESIRED_REPLICAS, (snap.name,), float(snap.desired_replicas))
        for state, count in snap.task_state_counts.items():
            yield Sample(TASKS, (snap.name, state), float(count))
        # Info-style metric: the series carries the data, the value is always 1
        yield Sample(INFO, (snap.name, snap.image), 1.0)
        yield Sample(CHANGE_TIME, (snap.name,), float(int(snap.last_change_time.timestamp())))


def empty_families(schema: Sequence[MetricSchema] = SERVICE_METRICS) -> list[GaugeMetricFamily]:
    """One sample-less family per schema entry."""
    return [GaugeMetricFamily(m.name, m.documentation, labels=list(m.labels)) for m in schema]


def build_families(
    samples: Iterable[Sample],
    schema: Sequence[MetricSchema] = SERVICE_METRICS,
) -> list[GaugeMetricFamily]:
    """Group samples into gauge families, in schema order."""
    families = empty_families(schema)
    by_name = {f.name: f for f in families}
    for sample in samples:
        family = by_name.get(sample.metric)
        if family is None:
            raise KeyError(f"No schema for metric {sample.metric!r}")
        family.add_metric(list(sample.labels), sample.value)
    return families
