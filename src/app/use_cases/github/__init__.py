"""Use cases específicos de webhooks do GitHub."""

from .forward_package_event import (
    FilterDecision,
    ForwardOutcome,
    ForwardPackageEventUseCase,
)

__all__ = [
    "FilterDecision",
    "ForwardOutcome",
    "ForwardPackageEventUseCase",
]
