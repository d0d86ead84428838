"""Fetch swarm services and tasks from the Docker Engine API."""

from __future__ import annotations

import logging
import re
import threading
from datetime import datetime, timezone
from typing import Any, Protocol

import docker
import requests
from docker.errors import DockerException
from docker.utils import kwargs_from_env

from swarm_exporter.config import Settings
from swarm_exporter.errors import FetchError
from swarm_exporter.observation.models import EPOCH, GLOBAL, REPLICATED, Service, ServiceMode, Task

logger = logging.getLogger(__name__)

# Docker reports RFC 3339 timestamps with up to nanosecond precision
_TIMESTAMP_RE = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(?P<frac>\d+))?(?P<tz>Z|[+-]\d{2}:\d{2})?$"
)

_MODE_KINDS = {
    "Replicated": REPLICATED,
    "Global": GLOBAL,
    "ReplicatedJob": "replicated-job",
    "GlobalJob": "global-job",
}


class ClusterFetcher(Protocol):
    """Source of point-in-time service and task listings."""

    def list_services(self) -> list[Service]: ...

    def list_tasks(self) -> list[Task]: ...


def parse_timestamp(value: Any) -> datetime:
    """Parse a Docker timestamp into an aware UTC datetime; fall back to the epoch."""
    if not isinstance(value, str):
        return EPOCH
    match = _TIMESTAMP_RE.match(value.strip())
    if not match:
        logger.debug("Unparseable task timestamp %r", value)
        return EPOCH
    text = match.group("base")
    frac = match.group("frac")
    if frac:
        text += "." + frac[:6].ljust(6, "0")
    tz = match.group("tz")
    text += "+00:00" if tz in (None, "Z") else tz
    try:
        return datetime.fromisoformat(text).astimezone(timezone.utc)
    except (ValueError, OverflowError):
        logger.debug("Unparseable task timestamp %r", value)
        return EPOCH


def _parse_mode(raw: Any, service_name: str) -> ServiceMode:
    """Extract the scheduling mode from Spec.Mode."""
    if not isinstance(raw, dict) or not raw:
        return ServiceMode(kind="unknown")
    key = next(iter(raw))
    kind = _MODE_KINDS.get(key, key.lower())
    if kind != REPLICATED:
        return ServiceMode(kind=kind)
    body = raw.get(key)
    replicas = body.get("Replicas") if isinstance(body, dict) else None
    if isinstance(replicas, bool) or not isinstance(replicas, int) or replicas < 0:
        logger.warning("Service %s has invalid replica count %r; omitting it", service_name, replicas)
        return ServiceMode(kind=kind)
    return ServiceMode(kind=kind, replicas=replicas)


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _build_service(raw: dict[str, Any]) -> Service:
    """Build Service from an entry of GET /services."""
    spec = _as_dict(raw.get("Spec"))
    name = str(spec.get("Name") or "")
    container_spec = _as_dict(_as_dict(spec.get("TaskTemplate")).get("ContainerSpec"))
    return Service(
        id=str(raw.get("ID") or ""),
        name=name,
        mode=_parse_mode(spec.get("Mode"), name),
        image=str(container_spec.get("Image") or ""),
    )


def _build_task(raw: dict[str, Any]) -> Task:
    """Build Task from an entry of GET /tasks."""
    status = _as_dict(raw.get("Status"))
    return Task(
        id=str(raw.get("ID") or ""),
        service_id=str(raw.get("ServiceID") or ""),
        state=str(status.get("State") or "unknown"),
        state_timestamp=parse_timestamp(status.get("Timestamp")),
    )


class DockerSwarmFetcher:
    """Lists swarm services and tasks through a docker APIClient."""

    def __init__(self, settings: Settings | None = None, api: docker.APIClient | None = None) -> None:
        self.settings = settings or Settings()
        self._api = api
        self._lock = threading.Lock()

    def _client(self) -> docker.APIClient:
        """Return the API client, creating it on first use."""
        with self._lock:
            if self._api is None:
                kwargs: dict[str, Any] = kwargs_from_env()
                if self.settings.docker_host:
                    kwargs["base_url"] = self.settings.docker_host
                kwargs["version"] = self.settings.docker_api_version
                kwargs["timeout"] = self.settings.docker_timeout
                try:
                    self._api = docker.APIClient(**kwargs)
                except (DockerException, requests.RequestException) as e:
                    raise FetchError("connect", str(e)) from e
                logger.info("Connected to Docker API at %s", self._api.base_url)
            return self._api

    def list_services(self) -> list[Service]:
        """List all swarm services."""
        try:
            raw = self._client().services()
        except (DockerException, requests.RequestException) as e:
            logger.warning("Failed to list services: %s", e)
            raise FetchError("list services", str(e)) from e
        return [_build_service(s) for s in raw or []]

    def list_tasks(self) -> list[Task]:
        """List all swarm tasks, across every service and node."""
        try:
            raw = self._client().tasks()
        except (DockerException, requests.RequestException) as e:
            logger.warning("Failed to list tasks: %s", e)
            raise FetchError("list tasks", str(e)) from e
        return [_build_task(t) for t in raw or []]
