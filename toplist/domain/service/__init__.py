"""Domain services."""

from .base import Service
from .clock import Clock, SystemClock
from .jwt_service import JWTService
from .server_service import ServerService
from .vote_service import VoteService

__all__ = [
    "Clock",
    "JWTService",
    "ServerService",
    "Service",
    "SystemClock",
    "VoteService",
]
