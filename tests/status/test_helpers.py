import httpx
import pytest

from mission_control.errors import StatusUpdateError, TaskCreationError
from mission_control.status import helpers
from mission_control.status.client import RelayClient, get_client, set_client


def test_set_status_sends_one_request(relay_client, agent_id, read_agent):
    helpers.set_status(agent_id, "working", "index docs", client=relay_client)

    assert relay_client.calls == [
        ("updateAgentStatus", {"agentId": agent_id, "status": "working", "currentTask": "index docs"}),
    ]
    agent = read_agent(agent_id)
    assert agent["status"] == "working"
    assert agent["currentTask"] == "index docs"


def test_set_status_uses_process_client(relay_client, agent_id):
    # relay_client is installed as the process-wide client
    helpers.set_status(agent_id, "blocked", "waiting on review")
    assert relay_client.calls[0][0] == "updateAgentStatus"


def test_set_status_logs_structured_entry(relay_client, agent_id, log_records):
    helpers.set_status(agent_id, "blocked", "disk full", client=relay_client)

    entries = [r for r in log_records if r["extra"].get("agent_id") == agent_id]
    assert len(entries) == 1
    extra = entries[0]["extra"]
    assert extra["status"] == "blocked"
    assert extra["note"] == "disk full"
    assert "timestamp" in extra


def test_set_status_failure_carries_status_text(failing_client):
    with pytest.raises(StatusUpdateError) as excinfo:
        helpers.set_status("a1", "idle", client=failing_client)

    assert excinfo.value.status_text == "Service Unavailable"
    assert excinfo.value.status_code == 503


def test_set_status_store_rejection(relay_client):
    with pytest.raises(StatusUpdateError) as excinfo:
        helpers.set_status("missing", "idle", client=relay_client)
    assert excinfo.value.status_code == 500


def test_set_status_transport_error():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = RelayClient("http://relay.test/api/relay", http=httpx.Client(transport=httpx.MockTransport(refuse)))

    with pytest.raises(StatusUpdateError) as excinfo:
        helpers.set_status("a1", "idle", client=client)
    assert "connection refused" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_create_task_returns_task_id(relay_client, agent_id, read_tasks):
    task_id = helpers.create_task(agent_id, "index docs", client=relay_client)

    tasks = read_tasks(agent_id)
    assert [t["id"] for t in tasks] == [task_id]


def test_create_task_failure(failing_client):
    with pytest.raises(TaskCreationError):
        helpers.create_task("a1", "index docs", client=failing_client)


def test_create_task_non_json_reply():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="ok"))
    client = RelayClient("http://relay.test/api/relay", http=httpx.Client(transport=transport))

    with pytest.raises(TaskCreationError) as excinfo:
        helpers.create_task("a1", "index docs", client=client)
    assert excinfo.value.status_code == 200
    assert isinstance(excinfo.value.__cause__, ValueError)


def test_mark_idle_clears_task(relay_client, agent_id, read_agent):
    helpers.mark_working(agent_id, "index docs", client=relay_client)
    relay_client.calls.clear()

    helpers.mark_idle(agent_id, client=relay_client)

    assert relay_client.calls == [("updateAgentStatus", {"agentId": agent_id, "status": "idle"})]
    agent = read_agent(agent_id)
    assert agent["status"] == "idle"
    assert agent["currentTask"] is None


def test_mark_working_sets_status_then_creates_task(relay_client, agent_id, read_tasks):
    helpers.mark_working(agent_id, "index docs", client=relay_client)

    assert [action for action, _ in relay_client.calls] == ["updateAgentStatus", "createTask"]
    assert relay_client.calls[1][1] == {"agentId": agent_id, "description": "index docs"}
    assert [t["description"] for t in read_tasks(agent_id)] == ["index docs"]


def test_mark_working_partial_failure_leaves_agent_working(http, agent_id, read_agent, read_tasks):
    # Let status updates through, reject task creation
    class TaskRejectingClient(RelayClient):
        def call(self, action, args=None):
            if action == "createTask":
                return httpx.Response(500, request=httpx.Request("POST", "http://relay.test"))
            return super().call(action, args)

    client = TaskRejectingClient("/api/relay", http=http)

    with pytest.raises(TaskCreationError):
        helpers.mark_working(agent_id, "index docs", client=client)

    agent = read_agent(agent_id)
    assert agent["status"] == "working"
    assert agent["currentTask"] == "index docs"
    assert read_tasks(agent_id) == []


def test_mark_blocked_stores_reason_as_task(relay_client, agent_id, read_agent):
    helpers.mark_blocked(agent_id, "disk full", client=relay_client)

    agent = read_agent(agent_id)
    assert agent["status"] == "blocked"
    assert agent["currentTask"] == "disk full"


def test_get_client_is_lazy_and_replaceable(monkeypatch):
    from mission_control.app.core.config import settings

    set_client(None)
    monkeypatch.setattr(settings, "RELAY_URL", "http://relay.test/api/relay")
    try:
        client = get_client()
        assert client.url == "http://relay.test/api/relay"
        assert get_client() is client

        replacement = RelayClient("http://other.test/api/relay")
        set_client(replacement)
        assert get_client() is replacement
    finally:
        set_client(None)
