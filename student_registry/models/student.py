from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from student_registry.db.base_class import Base

# Upper bound of a 32-bit signed INTEGER column.
MAX_STUDENT_ID = 2_147_483_647


class Student(Base):
    __tablename__ = "students"

    # The id is user-editable; changing it relocates the row (see services.students).
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(120), nullable=False)
    mobile: Mapped[str] = mapped_column(String(10), nullable=False)

    def __repr__(self) -> str:
        return f"Student(id={self.id!r}, name={self.name!r})"
