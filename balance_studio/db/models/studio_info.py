from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from ..session import Base

STUDIO_INFO_ID = 1


class StudioInfo(Base):
    __tablename__ = "studio_info"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=STUDIO_INFO_ID)
    name: Mapped[str | None] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text)
    address: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(32))
    instagram: Mapped[str | None] = mapped_column(String(128))
