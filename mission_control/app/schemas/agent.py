from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field

AgentStatus = Literal["idle", "working", "blocked"]
TaskStatus = Literal["pending", "in_progress", "completed"]

# --- Store records (wire format is camelCase) ---

class AgentRecord(BaseModel):
    id: str
    name: str
    role: str
    avatar: str
    status: AgentStatus
    current_task: Optional[str] = Field(default=None, alias="currentTask")
    last_updated: int = Field(alias="lastUpdated")

    class Config:
        from_attributes = True
        populate_by_name = True

class TaskRecord(BaseModel):
    id: str
    agent_id: str = Field(alias="agentId")
    description: str
    status: TaskStatus
    created_at: int = Field(alias="createdAt")
    updated_at: int = Field(alias="updatedAt")

    class Config:
        from_attributes = True
        populate_by_name = True

# --- Relay action arguments ---

class ActionArgs(BaseModel):
    class Config:
        populate_by_name = True
        extra = "forbid"

class NoArgs(ActionArgs):
    # listAgents ignores whatever the caller sends
    class Config:
        extra = "ignore"

class AgentIdArgs(ActionArgs):
    agent_id: str = Field(alias="agentId")

class UpdateAgentStatusArgs(ActionArgs):
    agent_id: str = Field(alias="agentId")
    status: AgentStatus
    # Omitted means cleared
    current_task: Optional[str] = Field(default=None, alias="currentTask")

class CreateAgentArgs(ActionArgs):
    name: str
    role: str
    avatar: str

class CreateTaskArgs(ActionArgs):
    agent_id: str = Field(alias="agentId")
    description: str

class UpdateTaskStatusArgs(ActionArgs):
    task_id: str = Field(alias="taskId")
    status: TaskStatus

# --- Relay envelope ---

class RelayRequest(BaseModel):
    action: str
    args: Optional[Dict[str, Any]] = None
