"""Application services coordinating the release engine and infrastructure."""

from setup_cmake.services.setup import (
    Resolution,
    SetupError,
    SetupOutcome,
    SetupService,
)

__all__ = [
    "Resolution",
    "SetupError",
    "SetupOutcome",
    "SetupService",
]
