"""
Login Indicator - Log Table Model.

ORM mapping for the course log table the indicator reads.
Only the columns the indicator needs are mapped.
"""

from sqlalchemy import Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from .database import Base


class LogEntry(Base):
    """
    One course log record.

    Every record counts as a login event for its user.
    """

    __tablename__ = "log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    userid: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="User who generated the log record",
    )

    course: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Course the record belongs to",
    )

    time: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Unix timestamp of the record",
    )

    __table_args__ = (
        Index("ix_log_course_time", "course", "time"),
    )

    def __repr__(self) -> str:
        return f"<LogEntry(id={self.id}, userid={self.userid}, course={self.course}, time={self.time})>"
