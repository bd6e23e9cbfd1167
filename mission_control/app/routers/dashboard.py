"""Mission Control dashboard page: one card per agent, re-polled from the relay."""

import html
import json
from datetime import datetime
from typing import Any, Dict, List

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from mission_control.app.core.config import settings
from mission_control.app.routers.relay import get_store
from mission_control.app.services.store import StatusStore

router = APIRouter(tags=["dashboard"])

STATUS_CONFIG: Dict[str, Dict[str, str]] = {
    "idle": {"label": "Idle", "color": "#3b82f6"},
    "working": {"label": "Working", "color": "#22c55e"},
    "blocked": {"label": "Blocked", "color": "#ef4444"},
}

# Cards needing attention first
STATUS_ORDER = {"working": 0, "blocked": 1, "idle": 2}


def sort_agents(agents: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sorted(agents, key=lambda a: (STATUS_ORDER.get(a["status"], len(STATUS_ORDER)), a["name"].lower()))


def format_timestamp(ms: int) -> str:
    return datetime.fromtimestamp(ms / 1000).strftime("%H:%M:%S")


def render_card(agent: Dict[str, Any]) -> str:
    config = STATUS_CONFIG[agent["status"]]
    esc = html.escape
    parts = [
        f'<div class="card {esc(agent["status"])}" style="border-color:{config["color"]}">',
        f'<div class="avatar">{esc(agent["avatar"])}</div>',
        f'<h3>{esc(agent["name"])}</h3>',
        f'<p class="role">{esc(agent["role"])}</p>',
        f'<span class="badge" style="background:{config["color"]}">{config["label"]}</span>',
    ]
    if agent.get("currentTask"):
        parts.append(f'<div class="task"><p class="label">Current Task</p><p>{esc(agent["currentTask"])}</p></div>')
    if agent.get("lastUpdated"):
        parts.append(f'<p class="updated">Updated: {format_timestamp(agent["lastUpdated"])}</p>')
    parts.append(f'<p class="id">{esc(agent["id"])}</p>')
    parts.append("</div>")
    return "".join(parts)


PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Mission Control - Agent Dashboard</title>
<style>
  body { background:#020617; color:#f1f5f9; font-family:sans-serif; margin:0; }
  header { background:#0f172a; border-bottom:1px solid #334155; padding:24px; }
  header p { color:#94a3b8; }
  main { display:grid; grid-template-columns:repeat(auto-fill,minmax(240px,1fr)); gap:16px; padding:24px; }
  .card { border:2px solid; border-radius:8px; padding:16px; }
  .avatar { font-size:48px; margin-bottom:16px; }
  .role { color:#94a3b8; font-size:14px; }
  .badge { border-radius:999px; padding:4px 12px; font-size:12px; font-weight:600; }
  .task { background:#1e293b; border:1px solid #334155; border-radius:4px; margin-top:16px; padding:12px; font-size:14px; }
  .task .label { font-size:12px; text-transform:uppercase; font-weight:600; }
  .updated { color:#64748b; font-size:12px; }
  .id { color:#475569; font-size:12px; font-family:monospace; word-break:break-all; }
</style>
</head>
<body>
<header>
  <h1>Mission Control</h1>
  <p>Real-time Agent Status Dashboard</p>
</header>
<main id="agents">__CARDS__</main>
<script>
const RELAY_URL = "/api/relay";
const POLL_INTERVAL_MS = __POLL_INTERVAL_MS__;
const STATUS_CONFIG = __STATUS_CONFIG__;
const STATUS_ORDER = __STATUS_ORDER__;

function esc(s) {
  const d = document.createElement("div");
  d.textContent = s;
  return d.innerHTML;
}

function renderCard(a) {
  const c = STATUS_CONFIG[a.status];
  let out = `<div class="card ${esc(a.status)}" style="border-color:${c.color}">`
    + `<div class="avatar">${esc(a.avatar)}</div>`
    + `<h3>${esc(a.name)}</h3>`
    + `<p class="role">${esc(a.role)}</p>`
    + `<span class="badge" style="background:${c.color}">${c.label}</span>`;
  if (a.currentTask) {
    out += `<div class="task"><p class="label">Current Task</p><p>${esc(a.currentTask)}</p></div>`;
  }
  if (a.lastUpdated) {
    out += `<p class="updated">Updated: ${new Date(a.lastUpdated).toLocaleTimeString()}</p>`;
  }
  return out + `<p class="id">${esc(a.id)}</p></div>`;
}

async function poll() {
  try {
    const res = await fetch(RELAY_URL, {
      method: "POST",
      headers: {"Content-Type": "application/json"},
      body: JSON.stringify({action: "listAgents", args: {}}),
    });
    if (!res.ok) return;
    const agents = await res.json();
    agents.sort((x, y) =>
      (STATUS_ORDER[x.status] - STATUS_ORDER[y.status]) ||
      x.name.toLowerCase().localeCompare(y.name.toLowerCase()));
    document.getElementById("agents").innerHTML = agents.map(renderCard).join("");
  } catch (e) {
    console.error("[Dashboard] poll failed", e);
  }
}

setInterval(poll, POLL_INTERVAL_MS);
</script>
</body>
</html>
"""


def render_page(agents: List[Dict[str, Any]]) -> str:
    cards = "".join(render_card(a) for a in sort_agents(agents))
    return (
        PAGE_TEMPLATE
        .replace("__CARDS__", cards)
        .replace("__POLL_INTERVAL_MS__", str(settings.POLL_INTERVAL_MS))
        .replace("__STATUS_CONFIG__", json.dumps(STATUS_CONFIG))
        .replace("__STATUS_ORDER__", json.dumps(STATUS_ORDER))
    )


@router.get("/", response_class=HTMLResponse)
def index(store: StatusStore = Depends(get_store)):
    return render_page(store.list_agents())
