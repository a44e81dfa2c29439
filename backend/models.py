"""Hero and item rows synced from OpenDota."""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from database import Base


class Hero(Base):
    __tablename__ = "heroes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    localized_name: Mapped[str] = mapped_column(String(64), nullable=False)
    primary_attr: Mapped[str] = mapped_column(String(8), nullable=False)
    attack_type: Mapped[str] = mapped_column(String(16), nullable=False)
    roles: Mapped[list | None] = mapped_column(JSON, default=list)
    img: Mapped[str | None] = mapped_column(String(255))
    icon: Mapped[str | None] = mapped_column(String(255))
    base_health: Mapped[int | None] = mapped_column(Integer)
    base_mana: Mapped[int | None] = mapped_column(Integer)
    base_armor: Mapped[float | None] = mapped_column(Float)
    move_speed: Mapped[int | None] = mapped_column(Integer)
    attack_range: Mapped[int | None] = mapped_column(Integer)
    base_str: Mapped[int | None] = mapped_column(Integer)
    base_agi: Mapped[int | None] = mapped_column(Integer)
    base_int: Mapped[int | None] = mapped_column(Integer)
    str_gain: Mapped[float | None] = mapped_column(Float)
    agi_gain: Mapped[float | None] = mapped_column(Float)
    int_gain: Mapped[float | None] = mapped_column(Float)
    last_synced_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    def to_dict(self) -> dict:
        data = {c.name: getattr(self, c.name) for c in self.__table__.columns}
        data["roles"] = data["roles"] or []
        if self.last_synced_at:
            data["last_synced_at"] = self.last_synced_at.isoformat()
        return data


class Item(Base):
    __tablename__ = "items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    localized_name: Mapped[str | None] = mapped_column(String(64))
    cost: Mapped[int | None] = mapped_column(Integer)
    secret_shop: Mapped[bool | None] = mapped_column(Boolean)
    side_shop: Mapped[bool | None] = mapped_column(Boolean)
    recipe: Mapped[bool | None] = mapped_column(Boolean)
    components: Mapped[list | None] = mapped_column(JSON)
    description: Mapped[str | None] = mapped_column(Text)
    img: Mapped[str | None] = mapped_column(String(255))
    last_synced_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    def to_dict(self) -> dict:
        data = {c.name: getattr(self, c.name) for c in self.__table__.columns}
        if self.last_synced_at:
            data["last_synced_at"] = self.last_synced_at.isoformat()
        return data
