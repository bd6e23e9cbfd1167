"""Agent status helpers and the lifecycle bridge that drives them."""

from mission_control.status.bridge import (
    AgentCompletionPayload,
    AgentErrorPayload,
    AgentEventListener,
    AgentLifecycleMiddleware,
    AgentSpawnPayload,
    TrackingResult,
    handle_agent_completion,
    handle_agent_error,
    handle_agent_spawn,
    register_agent,
)
from mission_control.status.client import RelayClient, get_client, set_client
from mission_control.status.helpers import (
    create_task,
    mark_blocked,
    mark_idle,
    mark_working,
    set_status,
)

__all__ = [
    "AgentCompletionPayload",
    "AgentErrorPayload",
    "AgentEventListener",
    "AgentLifecycleMiddleware",
    "AgentSpawnPayload",
    "RelayClient",
    "TrackingResult",
    "create_task",
    "get_client",
    "handle_agent_completion",
    "handle_agent_error",
    "handle_agent_spawn",
    "mark_blocked",
    "mark_idle",
    "mark_working",
    "register_agent",
    "set_client",
    "set_status",
]
