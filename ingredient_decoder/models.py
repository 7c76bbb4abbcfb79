from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from ingredient_decoder import db
from ingredient_decoder.analysis.matcher import (
    AnalysisResult,
    FlagType,
    IngredientFlag,
    SafetyStatus,
)

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.sqlite import JSON
from sqlalchemy.orm import Mapped, mapped_column

# ----------------------------
# Helpers
# ----------------------------

def utcnow() -> datetime:
    # SQLite has no real TZ; store UTC consistently.
    return datetime.now(timezone.utc)


def new_uuid() -> str:
    return str(uuid.uuid4())


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None

# ----------------------------
# Models
# ----------------------------

class UserFlag(db.Model):
    """
    One dietary restriction on the user's profile. Rows are read by the
    analyzer in creation order.
    """
    __tablename__ = "user_flag"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Insertion counter; created_at can tie within one request.
    position: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    type: Mapped[FlagType] = mapped_column(Enum(FlagType), nullable=False, index=True)
    value: Mapped[str] = mapped_column(String(128), nullable=False)
    display_name: Mapped[str] = mapped_column(String(256), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("type", "value", name="uq_user_flag_type_value"),
        CheckConstraint("length(value) > 0", name="ck_user_flag_value_nonempty"),
    )

    def to_flag(self) -> IngredientFlag:
        return IngredientFlag(
            id=self.id,
            type=self.type.value,
            value=self.value,
            display_name=self.display_name,
            is_active=self.is_active,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "value": self.value,
            "display_name": self.display_name,
            "is_active": self.is_active,
            "created_at": _iso(self.created_at),
        }


class ScanRecord(db.Model):
    """
    One analysed product, kept for the history view.
    """
    __tablename__ = "scan_record"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_uuid)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)

    # Only validated codes are stored.
    barcode: Mapped[Optional[str]] = mapped_column(String(14), nullable=True, index=True)
    barcode_format: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)

    product_name: Mapped[Optional[str]] = mapped_column(String(256), nullable=True)
    raw_ingredients: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    overall_status: Mapped[SafetyStatus] = mapped_column(Enum(SafetyStatus), nullable=False, index=True)
    flagged_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_ingredients: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Per-ingredient report as returned by the analyzer.
    ingredients: Mapped[Optional[list[dict[str, Any]]]] = mapped_column(JSON, nullable=True)
    flags_triggered: Mapped[Optional[list[str]]] = mapped_column(JSON, nullable=True)

    __table_args__ = (
        Index("ix_scan_record_created_status", "created_at", "overall_status"),
    )

    @classmethod
    def from_analysis(
        cls,
        result: AnalysisResult,
        raw_ingredients: Optional[str],
        product_name: Optional[str] = None,
        barcode: Optional[str] = None,
        barcode_format: Optional[str] = None,
    ) -> "ScanRecord":
        triggered: list[str] = []
        for ingredient in result.parsed_ingredients:
            for reason in ingredient.flag_reasons:
                if reason not in triggered:
                    triggered.append(reason)
        return cls(
            barcode=barcode,
            barcode_format=barcode_format,
            product_name=product_name,
            raw_ingredients=raw_ingredients,
            overall_status=result.overall_status,
            flagged_count=result.flagged_count,
            total_ingredients=len(result.parsed_ingredients),
            ingredients=[i.to_dict() for i in result.parsed_ingredients],
            flags_triggered=triggered,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "created_at": _iso(self.created_at),
            "barcode": self.barcode,
            "barcode_format": self.barcode_format,
            "product_name": self.product_name,
            "raw_ingredients": self.raw_ingredients,
            "overall_status": self.overall_status.value,
            "flagged_count": self.flagged_count,
            "total_ingredients": self.total_ingredients,
            "ingredients": self.ingredients or [],
            "flags_triggered": self.flags_triggered or [],
        }
