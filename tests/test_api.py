import pytest
from fastapi.testclient import TestClient

from bsmgreeks.api import app

REFERENCE = {"S": 112.5, "K": 190, "T": 0.21095890410958903, "r": 0.5, "q": 0.0,
             "option": "call", "target_price": 1.2}

@pytest.fixture
def client():
    return TestClient(app)

def test_price(client):
    resp = client.post("/price", json={"S": 100, "K": 100, "T": 1, "r": 0.05, "sigma": 0.2})
    assert resp.status_code == 200
    assert resp.json()["value"] == pytest.approx(10.450583572185565, abs=1e-9)

def test_price_put(client):
    resp = client.post("/price", json={"S": 100, "K": 100, "T": 1, "r": 0.05, "sigma": 0.2, "option": "put"})
    assert resp.json()["value"] == pytest.approx(5.573526022256971, abs=1e-9)

@pytest.mark.parametrize("body", [
    {"S": 0, "K": 100, "T": 1, "r": 0.05, "sigma": 0.2},
    {"S": 100, "K": 100, "T": -1, "r": 0.05, "sigma": 0.2},
    {"S": 100, "K": 100, "T": 1, "r": 0.05, "sigma": 0},
    {"S": 100, "K": 100, "T": 1, "r": 0.05, "sigma": 0.2, "option": "straddle"},
])
def test_price_validation(client, body):
    assert client.post("/price", json=body).status_code == 422

def _post_raw(client, path, raw):
    # Infinity / NaN literals are not standard JSON, so send the text as-is
    return client.post(path, content=raw, headers={"content-type": "application/json"})

@pytest.mark.parametrize("raw", [
    '{"S": 100, "K": 100, "T": 1, "r": 0.05, "sigma": Infinity}',
    '{"S": 100, "K": 100, "T": 1, "r": 0.05, "sigma": NaN}',
    '{"S": Infinity, "K": 100, "T": 1, "r": 0.05, "sigma": 0.2}',
    '{"S": 100, "K": 100, "T": 1, "r": -Infinity, "sigma": 0.2}',
])
def test_price_rejects_non_finite(client, raw):
    assert _post_raw(client, "/price", raw).status_code == 422

def test_price_rejects_overflowing_sigma(client):
    resp = client.post("/price", json={"S": 100, "K": 100, "T": 1, "r": 0.05, "sigma": 1e308})
    assert resp.status_code == 422

@pytest.mark.parametrize("path", ["/implied-vol", "/greeks"])
def test_iv_rejects_non_finite(client, path):
    raw = '{"S": 112.5, "K": 190, "T": 0.21, "r": Infinity, "target_price": 1.2}'
    assert _post_raw(client, path, raw).status_code == 422
    raw = '{"S": 112.5, "K": 190, "T": 0.21, "r": 0.5, "target_price": NaN}'
    assert _post_raw(client, path, raw).status_code == 422

def test_implied_vol(client):
    body = client.post("/implied-vol", json=REFERENCE).json()
    assert body["converged"] is True
    assert body["status"] == "converged"
    assert body["sigma"] == pytest.approx(0.616449844803655, abs=1e-4)

def test_implied_vol_degenerate(client):
    body = client.post("/implied-vol", json={**REFERENCE, "target_price": 500.0}).json()
    assert body["converged"] is False
    assert body["status"] == "degenerate"
    assert body["sigma"] is None
    assert "upper bound" in body["reason"]

def test_greeks(client):
    body = client.post("/greeks", json=REFERENCE).json()
    assert body["sigma"] == pytest.approx(0.616449844803655, abs=1e-4)
    assert body["delta"] == pytest.approx(0.09063789804591085, abs=1e-4)
    assert body["gamma"] == pytest.approx(0.005124951216808061, abs=1e-4)
    assert body["theta"] == pytest.approx(-0.04608938503448249, abs=1e-4)
    assert body["rho"] == pytest.approx(0.01897947373000337, abs=1e-4)
    assert body["vega"] == pytest.approx(0.08435102979004167, abs=1e-4)

def test_greeks_rejects_unsolvable_price(client):
    resp = client.post("/greeks", json={**REFERENCE, "target_price": 0.0})
    assert resp.status_code == 422
    assert "lower bound" in resp.json()["detail"]
