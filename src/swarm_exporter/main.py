"""CLI entrypoint for the swarm exporter."""

from __future__ import annotations

import argparse
import logging
import sys

from rich.logging import RichHandler

from swarm_exporter import __version__
from swarm_exporter.config import get_settings
from swarm_exporter.exporter import build_registry, serve
from swarm_exporter.observation import DockerSwarmFetcher


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Swarm Exporter: expose Docker Swarm service and task state to Prometheus.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Address to bind the metrics endpoint to (default: from env or 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=int,
        default=None,
        help="Port for the metrics endpoint (default: from env or 9675)",
    )
    parser.add_argument(
        "--docker-host",
        default=None,
        help="Docker daemon URL (default: DOCKER_HOST env or the local socket)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for swarm-exporter CLI."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )
    logger = logging.getLogger("swarm_exporter")
    if not args.verbose:
        logger.setLevel(logging.WARNING)

    try:
        overrides = {
            "listen_host": args.host,
            "listen_port": args.port,
            "docker_host": args.docker_host,
        }
        settings = get_settings(**{k: v for k, v in overrides.items() if v is not None})

        registry = build_registry(DockerSwarmFetcher(settings), settings)
        serve(settings, registry)
        return 0
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        logging.exception("Exporter failed")
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
