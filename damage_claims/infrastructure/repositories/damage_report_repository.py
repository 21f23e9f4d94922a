"""Persistence layer for damage reports."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from damage_claims.domain.entities import DamageItem, DamageReport, ReportStatus
from damage_claims.infrastructure.models import DamageItemModel, DamageReportModel
from damage_claims.utils import ensure_app_naive_datetime, ensure_app_timezone

from .user_repository import UserRepository


class DamageReportRepository:
    """Read damage reports for the notification workflows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, report_id: int) -> DamageReport | None:
        """Load a report, or ``None`` when it does not exist.

        A row holding values outside the domain enums raises ``LookupError``
        or ``ValueError``.
        """

        model = self.session.get(DamageReportModel, report_id)
        return self._to_entity(model) if model else None

    def list_ids_with_upcoming_deadlines(
        self, *, window_start: datetime, window_end: datetime
    ) -> Sequence[int]:
        """Return ids of reports with a reminder-eligible deadline in ``[window_start, window_end)``.

        A report qualifies on the Airbnb track when it has not been submitted
        yet, and on the proof track when proof is still required. Only ids are
        selected so one malformed row cannot break the whole listing; callers
        load each report with :meth:`get`.
        """

        start = ensure_app_naive_datetime(window_start)
        end = ensure_app_naive_datetime(window_end)
        query = (
            self.session.query(DamageReportModel.id)
            .filter(
                or_(
                    and_(
                        DamageReportModel.submitted_to_airbnb.is_(False),
                        DamageReportModel.airbnb_deadline >= start,
                        DamageReportModel.airbnb_deadline < end,
                    ),
                    and_(
                        DamageReportModel.status == ReportStatus.PROOF_REQUIRED,
                        DamageReportModel.proof_deadline >= start,
                        DamageReportModel.proof_deadline < end,
                    ),
                )
            )
            .order_by(DamageReportModel.id)
        )
        return [report_id for (report_id,) in query.all()]

    @staticmethod
    def _to_entity(model: DamageReportModel) -> DamageReport:
        return DamageReport(
            id=model.id,
            reported_by_id=model.reported_by_id,
            property_name=model.property_name,
            property_address=model.property_address,
            damage_date=ensure_app_timezone(model.damage_date),
            checkout_date=ensure_app_timezone(model.checkout_date),
            airbnb_deadline=ensure_app_timezone(model.airbnb_deadline),
            proof_deadline=ensure_app_timezone(model.proof_deadline),
            submitted_to_airbnb=bool(model.submitted_to_airbnb),
            status=ReportStatus(model.status),
            description=model.description,
            items=[DamageReportRepository._item_to_entity(item) for item in model.items],
            reported_by=(
                UserRepository._to_entity(model.reported_by)
                if model.reported_by is not None
                else None
            ),
            created_at=ensure_app_timezone(model.created_at),
        )

    @staticmethod
    def _item_to_entity(model: DamageItemModel) -> DamageItem:
        return DamageItem(
            id=model.id,
            item_name=model.item_name,
            damage_type=model.damage_type,
            description=model.description,
        )


__all__ = ["DamageReportRepository"]
