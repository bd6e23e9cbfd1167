from typing import Any, Dict, Tuple, Type

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.orm import Session

from mission_control.app.db.database import get_db
from mission_control.app.schemas.agent import (
    ActionArgs,
    AgentIdArgs,
    CreateAgentArgs,
    CreateTaskArgs,
    NoArgs,
    RelayRequest,
    UpdateAgentStatusArgs,
    UpdateTaskStatusArgs,
)
from mission_control.app.services.store import StatusStore

router = APIRouter(
    prefix="/api",
    tags=["relay"],
)

# action name -> (store method, argument schema)
ACTIONS: Dict[str, Tuple[str, Type[ActionArgs]]] = {
    "updateAgentStatus": ("update_agent_status", UpdateAgentStatusArgs),
    "createTask": ("create_task", CreateTaskArgs),
    "createAgent": ("create_agent", CreateAgentArgs),
    "getAgentStatus": ("get_agent_status", AgentIdArgs),
    "listAgents": ("list_agents", NoArgs),
    "getAgentTasks": ("get_agent_tasks", AgentIdArgs),
    "updateTaskStatus": ("update_task_status", UpdateTaskStatusArgs),
}


def get_store(db: Session = Depends(get_db)) -> StatusStore:
    return StatusStore(db)


def dispatch(store: StatusStore, action: str, args: Dict[str, Any]) -> Any:
    """Run one named store operation. Raises KeyError for unknown actions."""
    method_name, schema = ACTIONS[action]
    parsed = schema.model_validate(args)
    return getattr(store, method_name)(**parsed.model_dump())


@router.post("/relay")
def relay(request: RelayRequest, store: StatusStore = Depends(get_store)):
    action = request.action
    args = request.args or {}
    logger.info(f"[Relay] action: {action} {args}")

    if action not in ACTIONS:
        return JSONResponse(status_code=400, content={"error": f"Unknown action: {action}"})

    try:
        return dispatch(store, action, args)
    except Exception as e:
        logger.error(f"[Relay] {action} failed: {e}")
        store.db.rollback()
        return JSONResponse(status_code=500, content={"error": str(e) or "Unknown error occurred"})
