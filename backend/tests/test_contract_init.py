"""Contract tests for /init."""
from fastapi.testclient import TestClient


def test_init_returns_protocol_version(test_client: TestClient):
    response = test_client.get("/init")
    assert response.status_code == 200
    assert response.json()["protocolVersion"] == "1.0"


def test_init_configuration(test_client: TestClient):
    config = test_client.get("/init").json()["configuration"]

    assert config["startingBalance"] == 999
    assert config["creditAmount"] == 100
    assert config["enforceSufficientFunds"] is True
    assert config["symbolCount"] == 3
    assert config["reelPaytable"] == {
        "WIN_JACKPOT": 12,
        "WIN": 2,
        "WIN_SMALL": 1,
        "LOSE": -1,
    }


def test_init_grid_multipliers(test_client: TestClient):
    multipliers = test_client.get("/init").json()["configuration"]["gridRunMultipliers"]
    # JSON object keys are strings
    assert multipliers["3"] == 0.2
    assert multipliers["5"] == 1.0
    assert multipliers["10"] == 50.0
    assert "2" not in multipliers


def test_init_tracks_runtime_settings(test_client: TestClient, monkeypatch):
    """/init advertises the same credit amount /credit applies."""
    from slotspin.config import settings

    monkeypatch.setattr(settings, "credit_amount", 40)
    monkeypatch.setattr(settings, "enforce_sufficient_funds", False)

    config = test_client.get("/init").json()["configuration"]
    assert config["creditAmount"] == 40
    assert config["enforceSufficientFunds"] is False

    credited = test_client.post("/credit", json={"balance": 0}).json()["credited"]
    assert credited == config["creditAmount"]
