from __future__ import annotations

from typing import Optional

from sqlalchemy import func, select

from ingredient_decoder import db
from ingredient_decoder.analysis.matcher import FlagType, IngredientFlag
from ingredient_decoder.models import UserFlag


def list_flags(active_only: bool = False) -> list[UserFlag]:
    query = select(UserFlag).order_by(UserFlag.position.asc())
    if active_only:
        query = query.where(UserFlag.is_active.is_(True))
    return list(db.session.scalars(query))


def profile_flags() -> list[IngredientFlag]:
    """The stored flags as the analyzer consumes them, in stored order."""
    return [row.to_flag() for row in list_flags()]


def get_flag(flag_id: str) -> Optional[UserFlag]:
    return db.session.get(UserFlag, flag_id)


def find_flag(flag_type: FlagType, value: str) -> Optional[UserFlag]:
    return db.session.scalars(
        select(UserFlag).where(UserFlag.type == flag_type, UserFlag.value == value)
    ).first()


def add_flag(flag_type: FlagType, value: str, display_name: str) -> tuple[UserFlag, bool]:
    """Add a flag unless one with the same type and value exists.

    Returns ``(flag, created)``.
    """
    existing = find_flag(flag_type, value)
    if existing is not None:
        return existing, False

    next_position = (db.session.scalar(select(func.max(UserFlag.position))) or 0) + 1
    flag = UserFlag(
        type=flag_type,
        value=value,
        display_name=display_name,
        is_active=True,
        position=next_position,
    )
    db.session.add(flag)
    db.session.commit()
    return flag, True


def remove_flag(flag: UserFlag) -> None:
    db.session.delete(flag)
    db.session.commit()


def set_flag_active(flag: UserFlag, is_active: bool) -> UserFlag:
    flag.is_active = is_active
    db.session.commit()
    return flag


def toggle_flag(flag: UserFlag) -> UserFlag:
    return set_flag_active(flag, not flag.is_active)
