from fastapi.testclient import TestClient

from plate_reader.api.main import create_app
from plate_reader.application.displayed_plate import DisplayedPlate


def test_health() -> None:
    client = TestClient(create_app(DisplayedPlate()))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_plate_reflects_displayed_state() -> None:
    state = DisplayedPlate()
    client = TestClient(create_app(state))

    assert client.get("/plate").json() == {"plate": None, "updated_at": None}

    state.update("ABC1D23")
    body = client.get("/plate").json()

    assert body["plate"] == "ABC1D23"
    assert body["updated_at"] == state.updated_at
