import pytest
from fastapi.testclient import TestClient

from sambactl.api.server import app
from sambactl.session import ManagementSession, get_session
from sambactl.shares.parser import parse_one

from conftest import CONF_PATH, FakeExecutor

CONF = "[global]\n    workgroup = WORKGROUP\n\n[docs]\n    path = /srv/docs\n"


@pytest.fixture
def executor():
    executor = FakeExecutor({CONF_PATH: CONF})
    executor.respond(["testparm", "-s"])
    executor.respond(["systemctl", "reload", "smb"])
    executor.respond(["which", "smbd"], output="/usr/sbin/smbd\n")
    return executor


@pytest.fixture
def client(executor, no_settle):
    session = ManagementSession(executor, conf_path=CONF_PATH)
    app.dependency_overrides[get_session] = lambda: session
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


def test_list_shares(client):
    response = client.get("/shares")
    assert response.status_code == 200
    assert response.json()["data"][0]["name"] == "docs"


def test_list_shares_query(client):
    response = client.get("/shares", params={"q": "nothing"})
    assert response.json()["data"] == []


def test_get_missing_share(client):
    response = client.get("/shares/nope")
    assert response.status_code == 404


def test_create_share(client, executor):
    response = client.post("/shares", json={"name": "media", "path": "/srv/media", "guest": True})
    assert response.status_code == 201
    assert response.json()["data"]["action"] == "created"
    assert parse_one(executor.files[CONF_PATH], "media").guest is True


def test_create_conflict(client):
    response = client.post("/shares", json={"name": "docs", "path": "/srv/other"})
    assert response.status_code == 409


def test_create_invalid_name(client):
    response = client.post("/shares", json={"name": "my share", "path": "/srv/other"})
    assert response.status_code == 400


def test_update_share(client, executor):
    response = client.put("/shares/docs", json={"name": "docs", "path": "/srv/new"})
    assert response.status_code == 200
    body = response.json()["data"]
    assert body["action"] == "updated"
    assert body["backup_path"].startswith(CONF_PATH + ".backup.")
    assert parse_one(executor.files[CONF_PATH], "docs").path == "/srv/new"


def test_delete_share(client, executor):
    assert client.delete("/shares/docs").status_code == 200
    assert client.delete("/shares/docs").status_code == 404


def test_service_detect_and_status(client, executor):
    assert client.get("/service/detect").json()["data"]["service_name"] == "smbd"
    executor.respond(["pgrep", "-f", "smbd"], output="7\n")
    assert client.get("/service").json()["data"]["state"] == "active"


def test_service_invalid_action(client):
    assert client.post("/service/explode").status_code == 400


def test_service_start_failure(client):
    response = client.post("/service/start")
    assert response.status_code == 502
    assert "Failed to start Samba service" in response.json()["detail"]


def test_users(client, executor):
    executor.respond(["getent", "passwd"], output="alice:x:1000:1000:Alice:/home/alice:/bin/bash\n")
    executor.respond(["smbpasswd", "-a", "-s", "alice"])

    response = client.get("/users")
    assert response.json()["data"] == [
        {"username": "alice", "uid": 1000, "full_name": "Alice", "shell": "/bin/bash", "samba_enabled": False}
    ]
    assert client.post("/users/alice/enable", json={"password": "pw"}).status_code == 200
    assert client.post("/users/alice/enable", json={"password": ""}).status_code == 400
    assert client.post("/users/alice/disable").status_code == 502


def test_status_overview(client, executor):
    executor.respond(["pgrep", "-f", "smbd"], output="7\n")
    executor.respond(["getent", "passwd"], output="alice:x:1000:1000:Alice:/home/alice:/bin/bash\n")

    data = client.get("/status").json()["data"]

    assert data["detection"]["installed"] is True
    assert data["status"]["state"] == "active"
    assert [share["name"] for share in data["shares"]] == ["docs"]
    assert [user["username"] for user in data["users"]] == ["alice"]


@pytest.fixture
def missing_client(no_settle):
    executor = FakeExecutor({CONF_PATH: CONF})
    session = ManagementSession(executor, conf_path=CONF_PATH)
    app.dependency_overrides[get_session] = lambda: session
    with TestClient(app) as client:
        yield client, executor
    app.dependency_overrides.clear()


def test_status_overview_when_not_installed(missing_client):
    client, executor = missing_client
    response = client.get("/status")
    assert response.status_code == 200
    assert response.json()["data"]["detection"]["installed"] is False
    assert response.json()["data"]["shares"] == []


@pytest.mark.parametrize("method,url,body", [
    ("get", "/service/detect", None),
    ("get", "/shares", None),
    ("get", "/shares/docs", None),
    ("post", "/shares", {"name": "media", "path": "/srv/media"}),
    ("put", "/shares/docs", {"name": "docs", "path": "/srv/new"}),
    ("delete", "/shares/docs", None),
    ("get", "/users", None),
    ("post", "/users/alice/disable", None),
])
def test_installation_required(missing_client, method, url, body):
    client, executor = missing_client
    kwargs = {"json": body} if body is not None else {}

    response = client.request(method.upper(), url, **kwargs)

    assert response.status_code == 503
    assert "not installed" in response.json()["detail"]
    assert ["cat", CONF_PATH] not in executor.commands()
    assert executor.elevated() == []


def test_create_share_with_newline_in_name(client, executor):
    response = client.post("/shares", json={"name": "docs\n", "path": "/hijack"})
    assert response.status_code == 400
    assert parse_one(executor.files[CONF_PATH], "docs").path == "/srv/docs"


def test_create_share_with_injected_path(client, executor):
    response = client.post("/shares", json={"name": "media", "path": "/srv/media\n    root preexec = /tmp/evil.sh"})
    assert response.status_code == 400
    assert "root preexec" not in executor.files[CONF_PATH]
