"""
Donation request status transitions.

    pending    -> inprogress (donate only), canceled
    inprogress -> done, canceled
    done, canceled are terminal

Moving into ``inprogress`` also assigns the donor, so the generic update
path may not do it; only ``lifecycle.donate`` passes ``via_donate=True``.
"""
from donorhub.exceptions import InvalidOperation

from .models import DonationRequest

PENDING = DonationRequest.STATUS_PENDING
INPROGRESS = DonationRequest.STATUS_INPROGRESS
DONE = DonationRequest.STATUS_DONE
CANCELED = DonationRequest.STATUS_CANCELED

TRANSITIONS = {
    PENDING: {INPROGRESS, CANCELED},
    INPROGRESS: {DONE, CANCELED},
    DONE: set(),
    CANCELED: set(),
}

# Targets reachable only through donate()
DONATE_ONLY = {INPROGRESS}


def can_transition(current, target, via_donate=False):
    if current == target:
        return True
    if target in DONATE_ONLY and not via_donate:
        return False
    return target in TRANSITIONS.get(current, set())


def ensure_transition(current, target, via_donate=False):
    """Raise InvalidOperation unless ``current -> target`` is allowed."""
    if target not in TRANSITIONS:
        raise InvalidOperation(f"Unknown status '{target}'")
    if not can_transition(current, target, via_donate=via_donate):
        raise InvalidOperation(f"Cannot change status from {current} to {target}")
    return target
