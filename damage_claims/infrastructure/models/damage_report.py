"""SQLAlchemy models for damage reports and their items."""

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship
from sqlalchemy.sql import expression

from damage_claims.domain.entities import ReportStatus
from damage_claims.infrastructure.database import Base


class DamageReportModel(Base):
    """Database representation of a damage report."""

    __tablename__ = "damage_report"

    id = Column(Integer, primary_key=True, index=True)
    reported_by_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    property_name = Column(String(200), nullable=False)
    property_address = Column(String(255), nullable=True)
    damage_date = Column(DateTime, nullable=False)
    checkout_date = Column(DateTime, nullable=True)
    airbnb_deadline = Column(DateTime, nullable=True, index=True)
    proof_deadline = Column(DateTime, nullable=True, index=True)
    submitted_to_airbnb = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )
    status = Column(
        Enum(ReportStatus, native_enum=False, length=30),
        nullable=False,
        default=ReportStatus.PENDING,
        index=True,
    )
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    reported_by = relationship("UserModel", lazy="joined")
    items = relationship(
        "DamageItemModel",
        back_populates="damage_report",
        order_by="DamageItemModel.id",
        lazy="selectin",
        cascade="all, delete-orphan",
    )


class DamageItemModel(Base):
    """A damaged item attached to a report."""

    __tablename__ = "damage_item"

    id = Column(Integer, primary_key=True, index=True)
    damage_report_id = Column(
        Integer,
        ForeignKey("damage_report.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    item_name = Column(String(200), nullable=False)
    damage_type = Column(String(50), nullable=True)
    description = Column(Text, nullable=True)

    damage_report = relationship("DamageReportModel", back_populates="items")


__all__ = ["DamageItemModel", "DamageReportModel"]
