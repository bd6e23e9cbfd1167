import time
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from mission_control.app.models.agent import Agent, Task
from mission_control.app.schemas.agent import AgentRecord, TaskRecord
from mission_control.errors import AgentNotFoundError, TaskNotFoundError


def now_ms() -> int:
    return int(time.time() * 1000)


class StatusStore:
    """
    Agent and task records behind the relay.

    Each public method is one named store operation. Results are plain JSON
    values (camelCase dicts, ids, or None) ready to be returned by the relay.
    """

    def __init__(self, db: Session):
        self.db = db

    # --- Queries ---

    def list_agents(self) -> List[Dict[str, Any]]:
        agents = self.db.query(Agent).all()
        return [self._agent_record(a) for a in agents]

    def get_agent_status(self, agent_id: str) -> Optional[Dict[str, Any]]:
        agent = self.db.get(Agent, agent_id)
        return self._agent_record(agent) if agent else None

    def get_agent_tasks(self, agent_id: str) -> List[Dict[str, Any]]:
        tasks = (
            self.db.query(Task)
            .filter(Task.agent_id == agent_id)
            .order_by(Task.created_at)
            .all()
        )
        return [TaskRecord.model_validate(t).model_dump(by_alias=True) for t in tasks]

    # --- Mutations ---

    def create_agent(self, name: str, role: str, avatar: str) -> str:
        agent = Agent(
            name=name,
            role=role,
            avatar=avatar,
            status="idle",
            last_updated=now_ms(),
        )
        self.db.add(agent)
        self.db.commit()
        return agent.id

    def update_agent_status(self, agent_id: str, status: str, current_task: Optional[str] = None) -> None:
        agent = self._require_agent(agent_id)
        agent.status = status
        agent.current_task = current_task
        # Never move backwards, even if the clock does
        agent.last_updated = max(now_ms(), agent.last_updated or 0)
        self.db.commit()

    def create_task(self, agent_id: str, description: str) -> str:
        self._require_agent(agent_id)
        ts = now_ms()
        task = Task(
            agent_id=agent_id,
            description=description,
            status="pending",
            created_at=ts,
            updated_at=ts,
        )
        self.db.add(task)
        self.db.commit()
        return task.id

    def update_task_status(self, task_id: str, status: str) -> None:
        task = self.db.get(Task, task_id)
        if not task:
            raise TaskNotFoundError(task_id)
        task.status = status
        task.updated_at = max(now_ms(), task.updated_at or 0)
        self.db.commit()

    # --- Internals ---

    def _require_agent(self, agent_id: str) -> Agent:
        agent = self.db.get(Agent, agent_id)
        if not agent:
            raise AgentNotFoundError(agent_id)
        return agent

    @staticmethod
    def _agent_record(agent: Agent) -> Dict[str, Any]:
        return AgentRecord.model_validate(agent).model_dump(by_alias=True)
