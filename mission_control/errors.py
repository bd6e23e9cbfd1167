"""
Exception hierarchy for Mission Control.

Store errors are raised by the status store and turned into JSON error
responses by the relay. Helper errors are raised by the status update helpers
on any failed relay call and always reach the caller. The bridge wraps helper
errors in a TrackingError and reports them instead of raising.
"""

from typing import Optional


class MissionControlError(Exception):
    """Base class for all Mission Control errors."""


# --- Store tier ---

class StoreNotConfiguredError(MissionControlError):
    pass


class AgentNotFoundError(MissionControlError):
    def __init__(self, agent_id: str):
        super().__init__(f"Agent not found: {agent_id}")
        self.agent_id = agent_id


class TaskNotFoundError(MissionControlError):
    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


# --- Helper tier ---

class RelayCallError(MissionControlError):
    """A relay request failed or returned a non-success response."""

    prefix = "Relay call failed"

    def __init__(self, status_text: str, status_code: Optional[int] = None):
        super().__init__(f"{self.prefix}: {status_text}")
        self.status_text = status_text
        self.status_code = status_code


class StatusUpdateError(RelayCallError):
    prefix = "Failed to update agent status"


class TaskCreationError(RelayCallError):
    prefix = "Failed to create task"


class RegistrationError(RelayCallError):
    prefix = "Failed to register agent"


# --- Bridge tier ---

class TrackingError(MissionControlError):
    """A lifecycle event could not be reflected in the status store."""

    def __init__(self, event: str, agent_id: str, cause: BaseException):
        super().__init__(f"Tracking failed for {event} of {agent_id}: {cause}")
        self.event = event
        self.agent_id = agent_id
        self.cause = cause
