"""Command line interface: serve the dashboard, seed agents, emit lifecycle events."""

import sys
from typing import Optional

import typer
from loguru import logger

from mission_control.app.core.config import settings
from mission_control.errors import RelayCallError
from mission_control.roster import DEFAULT_AGENTS
from mission_control.status.bridge import (
    AgentCompletionPayload,
    AgentErrorPayload,
    AgentSpawnPayload,
    TrackingResult,
    handle_agent_completion,
    handle_agent_error,
    handle_agent_spawn,
    register_agent,
)
from mission_control.status.client import get_client
from mission_control.status.helpers import post_action

app = typer.Typer(help="Mission Control - real-time agent status dashboard")


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level")):
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else settings.LOG_LEVEL)


@app.command()
def serve(
    host: str = typer.Option(settings.HOST, help="Bind address"),
    port: int = typer.Option(settings.PORT, help="Bind port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """Run the relay endpoint and dashboard."""
    import uvicorn

    uvicorn.run("mission_control.app.main:app", host=host, port=port, reload=reload)


@app.command()
def seed():
    """Register the default agent roster."""
    for agent in DEFAULT_AGENTS:
        try:
            register_agent(agent["id"], agent["name"], agent["role"], agent["avatar"])
        except RelayCallError as e:
            typer.echo(f"Failed to register {agent['name']}: {e}", err=True)
            raise typer.Exit(1)
        typer.echo(f"{agent['avatar']}  {agent['name']} ({agent['role']})")


@app.command()
def agents():
    """List agents known to the store."""
    try:
        response = post_action(get_client(), "listAgents", {}, RelayCallError)
    except RelayCallError as e:
        typer.echo(f"Failed to list agents: {e}", err=True)
        raise typer.Exit(1)

    for agent in response.json():
        line = f"{agent['id']}  {agent['avatar']}  {agent['name']:<12} {agent['status']:<8}"
        if agent.get("currentTask"):
            line += f"  {agent['currentTask']}"
        typer.echo(line)


def _report(result: TrackingResult):
    if result.ok:
        typer.echo(f"{result.agent_id}: {result.event} tracked")
        return
    typer.echo(f"{result.agent_id}: {result.event} not tracked: {result.error.cause}", err=True)
    raise typer.Exit(1)


@app.command()
def spawn(
    agent_id: str,
    task: str,
    name: Optional[str] = typer.Option(None, help="Agent display name"),
):
    """Mark an agent as working on TASK."""
    payload = AgentSpawnPayload(agent_id=agent_id, agent_name=name or agent_id, task_description=task)
    _report(handle_agent_spawn(payload))


@app.command()
def complete(
    agent_id: str,
    result: Optional[str] = typer.Option(None, help="Result summary"),
):
    """Mark an agent as idle."""
    _report(handle_agent_completion(AgentCompletionPayload(agent_id=agent_id, result=result)))


@app.command()
def error(agent_id: str, message: str):
    """Mark an agent as blocked with MESSAGE."""
    _report(handle_agent_error(AgentErrorPayload(agent_id=agent_id, error=message)))


if __name__ == "__main__":
    app()
