"""Tests for flattening snapshots into gauge samples."""

from __future__ import annotations

from datetime import timedelta

import pytest

from swarm_exporter.aggregation import ServiceSnapshot
from swarm_exporter.emission import SERVICE_METRICS, Sample, build_families, iter_samples
from swarm_exporter.observation import EPOCH


def _snapshot(name: str = "web", **kwargs) -> ServiceSnapshot:
    return ServiceSnapshot(name=name, **kwargs)


def test_replicated_snapshot_yields_every_metric_in_order() -> None:
    snap = _snapshot(
        desired_replicas=3,
        task_state_counts={"running": 2, "failed": 1},
        image="nginx:1",
        last_change_time=EPOCH + timedelta(seconds=150, microseconds=900000),
    )

    assert list(iter_samples([snap])) == [
        Sample("swarm_service_desired_replicas", ("web",), 3.0),
        Sample("swarm_service_tasks", ("web", "running"), 2.0),
        Sample("swarm_service_tasks", ("web", "failed"), 1.0),
        Sample("swarm_service_info", ("web", "nginx:1"), 1.0),
        Sample("swarm_service_change_time", ("web",), 150.0),
    ]


def test_snapshot_without_desired_replicas_emits_no_replica_sample() -> None:
    samples = list(iter_samples([_snapshot(name="agent", image="agent:2")]))

    assert all(s.metric != "swarm_service_desired_replicas" for s in samples)


def test_empty_service_still_reports_zero_running_and_zero_change_time() -> None:
    samples = list(iter_samples([_snapshot(name="idle", desired_replicas=2)]))

    assert Sample("swarm_service_tasks", ("idle", "running"), 0.0) in samples
    assert Sample("swarm_service_change_time", ("idle",), 0.0) in samples


def test_families_follow_schema_order_and_keep_empty_ones() -> None:
    families = build_families(iter_samples([_snapshot(name="agent")]))

    assert [f.name for f in families] == [m.name for m in SERVICE_METRICS]
    assert families[0].samples == []
    tasks = families[1]
    assert tasks.type == "gauge"
    assert [(s.labels, s.value) for s in tasks.samples] == [({"service_name": "agent", "state": "running"}, 0.0)]


def test_unknown_metric_is_rejected() -> None:
    with pytest.raises(KeyError):
        build_families([Sample("swarm_service_bogus", ("web",), 1.0)])
