import pytest
from fastapi.testclient import TestClient

from api.dependencies import set_service_container
from api.main import create_app
from controllers.timer_preview_controller import TimerPreviewController
from managers.config_manager import ConfigManager
from services.config_service import ConfigService
from services.event_bus import EventBus
from services.service_container import ServiceContainer


@pytest.fixture
def services():
    config_manager = ConfigManager()
    config_manager.load()
    event_bus = EventBus()
    config_service = ConfigService(config_manager.timer_config, event_bus=event_bus)
    preview = TimerPreviewController(config_service, event_bus, tick_interval=60, blink_interval=60)

    container = ServiceContainer(
        config_manager=config_manager,
        config_service=config_service,
        event_bus=event_bus,
        preview_controller=preview,
    )
    set_service_container(container)
    yield container
    set_service_container(None)


@pytest.fixture
def client(services):
    with TestClient(create_app()) as test_client:
        yield test_client
        # Cancel the tick cadence inside the client's event loop
        test_client.post("/api/v1/timer/stop")


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_initial_state_and_frame(client):
    state = client.get("/api/v1/timer/state").json()
    assert state == {"elapsed_seconds": 0, "status": "IDLE"}

    frame = client.get("/api/v1/timer/frame").json()
    assert frame["text"] == "00:00"
    assert frame["color"] == {"hex": "#ffffff", "rgb": [255, 255, 255]}
    assert frame["visible"] is True
    assert frame["limit_reached"] is False
    assert frame["band"] == "DEFAULT"
    assert frame["remaining_seconds"] == 300


def test_transport_operations(client, services):
    response = client.post("/api/v1/timer/start")
    assert response.status_code == 200
    body = response.json()
    assert body["action"] == "start"
    assert body["state"]["status"] == "RUNNING"
    assert services.preview_controller.tick_cadence.running is True

    body = client.post("/api/v1/timer/pause").json()
    assert body["state"]["status"] == "PAUSED"
    assert services.preview_controller.tick_cadence.running is False

    body = client.post("/api/v1/timer/reset").json()
    assert body["state"] == {"elapsed_seconds": 0, "status": "PAUSED"}

    body = client.post("/api/v1/timer/stop").json()
    assert body["state"]["status"] == "IDLE"


def test_transport_action_is_case_insensitive(client):
    body = client.post("/api/v1/timer/START").json()
    assert body["action"] == "start"


def test_unknown_transport_action(client):
    response = client.post("/api/v1/timer/rewind")
    assert response.status_code == 404
    error = response.json()["error"]
    assert error["code"] == "UNKNOWN_TRANSPORT_ACTION"
    assert error["details"]["valid_actions"] == ["start", "pause", "stop", "reset"]


def test_get_config(client):
    config = client.get("/api/v1/config").json()
    assert config["limit_seconds"] == 300
    assert config["font_family"] == "Arial"
    assert config["color_5s"] == "#ff0000"


def test_patch_config_changes_next_frame(client):
    response = client.patch("/api/v1/config", json={"limit_seconds": 20, "color_30s": "#0F0"})
    assert response.status_code == 200
    assert response.json()["limit_seconds"] == 20
    assert response.json()["color_30s"] == "#00ff00"

    frame = client.get("/api/v1/timer/frame").json()
    assert frame["band"] == "BAND_30S"
    assert frame["remaining_seconds"] == 20


def test_patch_config_rejects_bad_color(client):
    response = client.patch("/api/v1/config", json={"color_5s": "#12"})
    assert response.status_code == 422
    body = response.json()
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert body["validation_errors"][0]["field"] == "color_5s"


def test_patch_config_rejects_unknown_field(client):
    response = client.patch("/api/v1/config", json={"colour": "#fff"})
    assert response.status_code == 422


def test_patch_config_accepts_any_font(client):
    response = client.patch("/api/v1/config", json={"font_family": "Fira Code"})
    assert response.status_code == 200
    assert response.json()["font_family"] == "Fira Code"

    fonts = client.get("/api/v1/config/fonts").json()
    assert fonts["current"] == "Fira Code"
    assert "Fira Code" in fonts["fonts"]
    assert fonts["count"] == len(fonts["fonts"])


def test_patch_config_huge_limit_is_kept(client):
    response = client.patch("/api/v1/config", json={"limit_seconds": 10**400})
    assert response.status_code == 200
    assert response.json()["limit_seconds"] == 10**400


def test_put_config_replaces_with_defaults(client):
    client.patch("/api/v1/config", json={"final_message": "BYE", "font_size": 64})

    config = client.put("/api/v1/config", json={"limit_seconds": 10}).json()

    assert config["limit_seconds"] == 10
    assert config["final_message"] == "TIME UP"
    assert config["font_size"] == 120


def test_reset_config(client):
    client.patch("/api/v1/config", json={"limit_enabled": False})
    config = client.post("/api/v1/config/reset").json()
    assert config["limit_enabled"] is True


def test_fonts(client):
    body = client.get("/api/v1/config/fonts").json()
    assert body["current"] == "Arial"
    assert body["count"] == len(body["fonts"])
    assert "Comic Sans MS" in body["fonts"]


def test_export_prompt(client):
    client.patch("/api/v1/config", json={"limit_seconds": 45, "final_message": "END"})

    body = client.get("/api/v1/export/prompt").json()

    assert body["plugin_name"] == "ProgressiveTimer"
    assert body["plugin_id"] == "MZN1"
    assert body["limit_seconds"] == 45
    assert 'draw message: "END"' in body["prompt"]


def test_system_tasks(client):
    client.post("/api/v1/timer/start")

    body = client.get("/api/v1/system/tasks", params={"status": "active"}).json()
    assert [t["category"] for t in body["tasks"]] == ["CADENCE"]

    health = client.get("/api/v1/system/health").json()
    assert health["status"] == "healthy"


def test_service_not_ready():
    set_service_container(None)
    with TestClient(create_app()) as test_client:
        response = test_client.get("/api/v1/timer/state")

    assert response.status_code == 503
    assert response.json()["error"]["code"] == "SERVICE_NOT_READY"
