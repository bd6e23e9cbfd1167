"""
Agent status helpers.

Turn a desired agent status into relay calls, one call per transition.
Every helper raises on failure; callers decide whether to swallow.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Type

import httpx
from loguru import logger

from mission_control.errors import RelayCallError, StatusUpdateError, TaskCreationError
from mission_control.status.client import RelayClient, get_client


def post_action(client: Optional[RelayClient], action: str, args: Dict[str, Any],
                error_cls: Type[RelayCallError]) -> httpx.Response:
    client = client or get_client()
    try:
        response = client.call(action, args)
    except httpx.HTTPError as e:
        raise error_cls(str(e) or type(e).__name__) from e

    if not response.is_success:
        raise error_cls(response.reason_phrase, status_code=response.status_code)
    return response


def set_status(agent_id: str, status: str, note: Optional[str] = None,
               client: Optional[RelayClient] = None) -> None:
    """
    Set an agent's status and current task text in one request.

    Args:
        agent_id: Store id of the agent.
        status: "idle", "working" or "blocked".
        note: Task description (working), reason (blocked), or None to clear.
    """
    args: Dict[str, Any] = {"agentId": agent_id, "status": status}
    if note is not None:
        args["currentTask"] = note

    try:
        post_action(client, "updateAgentStatus", args, StatusUpdateError)
    except StatusUpdateError as e:
        logger.error(f"[AgentStatus] Error updating agent status: {e}")
        raise

    logger.bind(
        agent_id=agent_id,
        status=status,
        note=note,
        timestamp=datetime.now(timezone.utc).isoformat(),
    ).info(f"[AgentStatus] Updated {agent_id} to {status}")


def create_task(agent_id: str, description: str, client: Optional[RelayClient] = None) -> str:
    """Create a pending task row for the agent and return its id."""
    try:
        response = post_action(
            client,
            "createTask",
            {"agentId": agent_id, "description": description},
            TaskCreationError,
        )
        try:
            task_id = response.json()
        except ValueError as e:
            raise TaskCreationError(f"Invalid task id in response: {e}", status_code=response.status_code) from e
    except TaskCreationError as e:
        logger.error(f"[AgentStatus] Error creating task: {e}")
        raise

    logger.info(f"[AgentStatus] Created task {task_id} for {agent_id}: {description}")
    return task_id


def mark_idle(agent_id: str, client: Optional[RelayClient] = None) -> None:
    set_status(agent_id, "idle", None, client=client)


def mark_working(agent_id: str, description: str, client: Optional[RelayClient] = None) -> None:
    # Two independent requests. If the task insert fails the agent is left
    # "working" with no task row.
    set_status(agent_id, "working", description, client=client)
    create_task(agent_id, description, client=client)


def mark_blocked(agent_id: str, reason: str, client: Optional[RelayClient] = None) -> None:
    set_status(agent_id, "blocked", reason, client=client)
