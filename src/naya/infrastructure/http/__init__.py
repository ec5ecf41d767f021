"""HTTP endpoints."""

from naya.infrastructure.http.health_server import HealthServer

__all__ = ["HealthServer"]
