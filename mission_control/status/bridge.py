"""
Agent lifecycle bridge.

Translates agent lifecycle events into status updates on the dashboard:

- spawn      -> "working" (plus a pending task row)
- completion -> "idle"
- error      -> "blocked" (the error text becomes the current task)

The bridge keeps no state of its own. Tracking failures are logged and
returned as a TrackingResult, never raised, so a broken dashboard cannot
abort an agent's real work.
"""

import json
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from loguru import logger
from pydantic import BaseModel, Field

from mission_control.app.core.config import settings
from mission_control.errors import RegistrationError, TrackingError
from mission_control.status.client import RelayClient, get_client
from mission_control.status.helpers import mark_blocked, mark_idle, mark_working, post_action

DEFAULT_TASK_DESCRIPTION = "Assigned task"


def _now_ms() -> int:
    return int(time.time() * 1000)


def _iso(ms: float) -> str:
    try:
        return datetime.fromtimestamp(ms / 1000, tz=timezone.utc).isoformat()
    except (ValueError, OverflowError, OSError):
        # Outside the platform's datetime range; log the raw value
        return f"{ms}ms"

# --- Event payloads ---

class LifecyclePayload(BaseModel):
    agent_id: str = Field(alias="agentId")
    timestamp: int = Field(default_factory=_now_ms)

    class Config:
        populate_by_name = True

class AgentSpawnPayload(LifecyclePayload):
    agent_name: str = Field(alias="agentName")
    task_description: str = Field(alias="taskDescription")

class AgentCompletionPayload(LifecyclePayload):
    result: Optional[str] = None

class AgentErrorPayload(LifecyclePayload):
    error: str


@dataclass
class TrackingResult:
    event: str
    agent_id: str
    error: Optional[TrackingError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


FailureCallback = Callable[[TrackingResult], None]


def _track(event: str, agent_id: str, update: Callable[[], None]) -> TrackingResult:
    try:
        update()
    except Exception as e:
        logger.error(f"[Bridge] Error handling agent {event} for {agent_id}: {e}")
        tracking_error = TrackingError(event, agent_id, e)
        tracking_error.__cause__ = e
        return TrackingResult(event, agent_id, tracking_error)
    return TrackingResult(event, agent_id)

# --- Handlers ---

def handle_agent_spawn(payload: AgentSpawnPayload, client: Optional[RelayClient] = None) -> TrackingResult:
    logger.info(
        f"[Bridge] Agent spawned: {payload.agent_id} ({payload.agent_name}) "
        f"task={payload.task_description!r} at {_iso(payload.timestamp)}"
    )
    result = _track(
        "spawn",
        payload.agent_id,
        lambda: mark_working(payload.agent_id, payload.task_description, client=client),
    )
    if result.ok:
        logger.info(f"[Bridge] Marked {payload.agent_id} as working")
    return result


def handle_agent_completion(payload: AgentCompletionPayload, client: Optional[RelayClient] = None) -> TrackingResult:
    logger.info(f"[Bridge] Agent completed: {payload.agent_id} at {_iso(payload.timestamp)}")
    result = _track("completion", payload.agent_id, lambda: mark_idle(payload.agent_id, client=client))
    if result.ok:
        logger.info(f"[Bridge] Marked {payload.agent_id} as idle")
    return result


def handle_agent_error(payload: AgentErrorPayload, client: Optional[RelayClient] = None) -> TrackingResult:
    logger.warning(f"[Bridge] Agent error: {payload.agent_id}: {payload.error} at {_iso(payload.timestamp)}")
    result = _track(
        "error",
        payload.agent_id,
        lambda: mark_blocked(payload.agent_id, payload.error, client=client),
    )
    if result.ok:
        logger.info(f"[Bridge] Marked {payload.agent_id} as blocked")
    return result

# --- Integration surfaces ---

class AgentEventListener:
    """
    Event-handler object for an agent runtime's event system.

    on_tracking_failure, if given, receives every failed TrackingResult.
    """

    def __init__(self, client: Optional[RelayClient] = None,
                 on_tracking_failure: Optional[FailureCallback] = None):
        self.client = client
        self.on_tracking_failure = on_tracking_failure

    def _report(self, result: TrackingResult) -> TrackingResult:
        if not result.ok and self.on_tracking_failure:
            try:
                self.on_tracking_failure(result)
            except Exception:
                logger.exception(f"[Bridge] Tracking failure callback raised for {result.agent_id}")
        return result

    def on_spawn(self, payload: AgentSpawnPayload) -> TrackingResult:
        return self._report(handle_agent_spawn(payload, client=self.client))

    def on_complete(self, payload: AgentCompletionPayload) -> TrackingResult:
        return self._report(handle_agent_completion(payload, client=self.client))

    def on_error(self, payload: AgentErrorPayload) -> TrackingResult:
        return self._report(handle_agent_error(payload, client=self.client))


class AgentLifecycleMiddleware:
    """
    Hooks for wrapping an agent spawner's spawn / complete / error lifecycle.

    Hooks return the value they were given. on_error re-raises the agent's own
    error after tracking it; tracking failures are still only reported.
    """

    def __init__(self, client: Optional[RelayClient] = None,
                 on_tracking_failure: Optional[FailureCallback] = None):
        self.listener = AgentEventListener(client, on_tracking_failure)

    def before_spawn(self, agent_config: Dict[str, Any]) -> Dict[str, Any]:
        logger.debug(f"[Bridge] before_spawn hook: {agent_config}")
        return agent_config

    def after_spawn(self, agent_config: Dict[str, Any], result: Any) -> Any:
        agent_id = result.get("agentId") if isinstance(result, dict) else None
        payload = AgentSpawnPayload(
            agent_id=str(agent_id or agent_config.get("id", "")),
            agent_name=str(agent_config.get("name", "")),
            task_description=agent_config.get("task") or DEFAULT_TASK_DESCRIPTION,
        )
        self.listener.on_spawn(payload)
        return result

    def on_complete(self, agent_id: str, result: Any) -> Any:
        payload = AgentCompletionPayload(
            agent_id=agent_id,
            result=None if result is None else json.dumps(result, default=str),
        )
        self.listener.on_complete(payload)
        return result

    def on_error(self, agent_id: str, error: BaseException):
        payload = AgentErrorPayload(agent_id=agent_id, error=str(error))
        self.listener.on_error(payload)
        raise error


def register_agent(agent_id: str, name: str, role: str, avatar: Optional[str] = None,
                   client: Optional[RelayClient] = None) -> str:
    """
    Create a dashboard record for an agent.

    Returns the caller's agent_id, not the id the store generated; lifecycle
    events keep using the caller's id.
    """
    avatar = avatar or settings.DEFAULT_AVATAR
    try:
        response = post_action(
            client or get_client(),
            "createAgent",
            {"name": name, "role": role, "avatar": avatar},
            RegistrationError,
        )
    except RegistrationError as e:
        logger.error(f"[Bridge] Error registering agent {agent_id}: {e}")
        raise

    logger.info(f"[Bridge] Registered agent: {agent_id} name={name} role={role}")
    logger.debug(f"[Bridge] Store id for {agent_id}: {response.text}")
    return agent_id
