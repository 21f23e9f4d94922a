"""Domain entities describing a reported property damage."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum

from .user import User

AIRBNB_DEADLINE_DAYS = 14
PROOF_DEADLINE_DAYS = 30
UNNAMED_ITEM_LABEL = "Multiple items"


class ReportStatus(str, Enum):
    """Lifecycle states of a damage report."""

    PENDING = "PENDING"
    IN_REVIEW = "IN_REVIEW"
    SUBMITTED_TO_AIRBNB = "SUBMITTED_TO_AIRBNB"
    PROOF_REQUIRED = "PROOF_REQUIRED"
    APPROVED = "APPROVED"
    RESOLVED = "RESOLVED"
    CANCELLED = "CANCELLED"


def compute_claim_deadlines(damage_date: datetime) -> tuple[datetime, datetime]:
    """Return the ``(airbnb_deadline, proof_deadline)`` pair for ``damage_date``."""

    return (
        damage_date + timedelta(days=AIRBNB_DEADLINE_DAYS),
        damage_date + timedelta(days=PROOF_DEADLINE_DAYS),
    )


@dataclass
class DamageItem:
    """A single damaged item listed on a report."""

    id: int | None
    item_name: str
    damage_type: str | None = None
    description: str | None = None


@dataclass
class DamageReport:
    """Damage reported by a cleaner and tracked against the claim deadlines."""

    id: int | None
    reported_by_id: int
    property_name: str
    damage_date: datetime
    checkout_date: datetime | None
    airbnb_deadline: datetime | None
    proof_deadline: datetime | None
    status: ReportStatus = ReportStatus.PENDING
    submitted_to_airbnb: bool = False
    property_address: str | None = None
    description: str | None = None
    items: list[DamageItem] = field(default_factory=list)
    reported_by: User | None = None
    created_at: datetime | None = None

    @property
    def first_item_name(self) -> str:
        """Return the first damaged item's name, used as a short label."""

        if self.items and self.items[0].item_name:
            return self.items[0].item_name
        return UNNAMED_ITEM_LABEL


__all__ = [
    "AIRBNB_DEADLINE_DAYS",
    "PROOF_DEADLINE_DAYS",
    "DamageItem",
    "DamageReport",
    "ReportStatus",
    "compute_claim_deadlines",
]
