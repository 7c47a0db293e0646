from sqlalchemy import CheckConstraint, Column, Integer, String, Text

from .database import Base


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint("status IN ('todo', 'done')", name="ck_tasks_status"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False, default="")
    status = Column(String(4), nullable=False, default="todo")
    created_at = Column("createdAt", String(30), nullable=False)

    def __repr__(self):
        return f"<Task {self.id} {self.title!r} {self.status}>"
