"""Forward-only status progression shared by Order and ShippingRequest."""

from __future__ import annotations

from enum import Enum

from greenmarket.domain.exceptions import StateError


def ordinal(status: Enum) -> int:
    """Position of ``status`` in its enum's declaration order."""
    return list(type(status)).index(status)


def ensure_forward(
    current: Enum,
    target: Enum,
    terminal: frozenset,
    kind: str,
) -> None:
    """Reject transitions out of a terminal state and backward transitions.

    A target equal to ``current`` passes; callers treat it as a no-op.
    """
    if current in terminal:
        raise StateError(
            f"Cannot change status of a {current.value} {kind}"
        )
    if ordinal(target) < ordinal(current):
        raise StateError(
            f"Cannot change {kind} status from {current.value} to {target.value}"
        )
