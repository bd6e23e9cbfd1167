import uuid

from sqlalchemy import BigInteger, Column, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from mission_control.app.db.database import Base


def _new_id() -> str:
    return uuid.uuid4().hex


class Agent(Base):
    __tablename__ = "agents"

    id = Column(String, primary_key=True, default=_new_id)
    name = Column(String, nullable=False, index=True)
    role = Column(String, nullable=False)
    avatar = Column(String, nullable=False)
    status = Column(String, nullable=False, default="idle", index=True)

    # Task text while working, reason while blocked, NULL while idle
    current_task = Column(Text, nullable=True)

    # Epoch milliseconds
    last_updated = Column(BigInteger, nullable=False)

    tasks = relationship("Task", back_populates="agent")


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String, primary_key=True, default=_new_id)
    agent_id = Column(String, ForeignKey("agents.id"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    status = Column(String, nullable=False, default="pending", index=True)
    created_at = Column(BigInteger, nullable=False)
    updated_at = Column(BigInteger, nullable=False)

    agent = relationship("Agent", back_populates="tasks")
