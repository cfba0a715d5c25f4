from __future__ import annotations

import base64
from typing import List

import pytest
from fastapi.testclient import TestClient
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.transaction import VersionedTransaction

from actions_api import create_app
from actions_api.errors import InvalidParameterError, UpstreamError
from actions_api.routers.pumpdotfun import get_service
from actions_api.schemas import TokenAsset

from .conftest import ASSET_RESULT, unsigned_transaction


class FakeService:
    def __init__(self, asset: dict | None = None, error: Exception | None = None) -> None:
        self.asset = asset if asset is not None else ASSET_RESULT
        self.error = error
        self.token_calls: List[str] = []
        self.buy_calls: List[tuple] = []

    async def get_token(self, address: str) -> TokenAsset:
        self.token_calls.append(address)
        if self.error is not None:
            raise self.error
        return TokenAsset.model_validate({**self.asset, "id": address})

    async def build_buy_transaction(self, mint: Pubkey, buyer: Pubkey, lamports: int, slippage_basis_points: int):
        self.buy_calls.append((mint, buyer, lamports, slippage_basis_points))
        if self.error is not None:
            raise self.error
        return unsigned_transaction(buyer)


@pytest.fixture
def service() -> FakeService:
    return FakeService()


@pytest.fixture
def client(settings, service):
    app = create_app(settings)
    app.dependency_overrides[get_service] = lambda: service
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def token() -> str:
    return str(Pubkey.new_unique())


@pytest.fixture
def account() -> str:
    return str(Keypair().pubkey())


def test_discovery_lists_presets_and_custom_amount(client, service, token):
    response = client.get(f"/api/pumpdotfun/{token}")

    assert response.status_code == 200
    body = response.json()
    assert body["icon"] == "https://example.com/test.png"
    assert body["label"] == "1 SOL"
    assert body["title"] == "Test Token"
    assert body["description"] == "A token used in tests"

    actions = body["links"]["actions"]
    assert len(actions) == 4
    assert [a["label"] for a in actions[:3]] == ["1 SOL", "5 SOL", "10 SOL"]
    assert [a["href"] for a in actions[:3]] == [
        f"/api/pumpdotfun/{token}/1",
        f"/api/pumpdotfun/{token}/5",
        f"/api/pumpdotfun/{token}/10",
    ]
    assert "parameters" not in actions[0]

    custom = actions[3]
    assert custom["label"] == "Buy TEST"
    assert custom["href"] == f"/api/pumpdotfun/{token}/{{amount}}"
    assert custom["parameters"] == [{"name": "amount", "label": "Enter a custom SOL amount"}]
    assert all(token in a["href"] for a in actions)
    assert service.token_calls == [token]


def test_label_does_not_depend_on_token(client, service):
    for _ in range(3):
        response = client.get(f"/api/pumpdotfun/{Pubkey.new_unique()}")
        assert response.json()["label"] == "1 SOL"


def test_discovery_with_amount_has_no_links(client, token):
    response = client.get(f"/api/pumpdotfun/{token}/5")

    assert response.status_code == 200
    body = response.json()
    assert body == {
        "icon": "https://example.com/test.png",
        "label": "1 SOL",
        "title": "Test Token",
        "description": "A token used in tests",
    }


def test_discovery_missing_description_defaults_to_empty(settings, token):
    asset = {
        **ASSET_RESULT,
        "content": {
            "metadata": {"name": "Bare", "symbol": "BARE"},
            "links": {"image": "https://example.com/bare.png"},
        },
    }
    app = create_app(settings)
    app.dependency_overrides[get_service] = lambda: FakeService(asset=asset)
    with TestClient(app) as client:
        response = client.get(f"/api/pumpdotfun/{token}")

    assert response.status_code == 200
    assert response.json()["description"] == ""


@pytest.mark.parametrize("path", ["", "/1"])
def test_discovery_fails_when_metadata_missing(settings, token, path):
    failing = FakeService(error=UpstreamError.missing_result("getAsset"))
    app = create_app(settings)
    app.dependency_overrides[get_service] = lambda: failing
    with TestClient(app) as client:
        response = client.get(f"/api/pumpdotfun/{token}{path}")

    assert response.status_code == 502
    assert "no result" in response.json()["message"]


def test_discovery_rejects_invalid_token(client, service):
    response = client.get("/api/pumpdotfun/not-a-key")

    assert response.status_code == 422
    assert "token" in response.json()["message"]
    assert service.token_calls == []


def test_discovery_with_amount_rejects_invalid_amount(client, service, token):
    response = client.get(f"/api/pumpdotfun/{token}/lots")

    assert response.status_code == 422
    assert service.token_calls == []


def test_post_builds_transaction(client, service, token, account):
    response = client.post(f"/api/pumpdotfun/{token}/1", json={"account": account})

    assert response.status_code == 200
    body = response.json()
    assert list(body) == ["transaction"]
    tx = VersionedTransaction.from_bytes(base64.b64decode(body["transaction"]))
    assert tx.message.account_keys[0] == Pubkey.from_string(account)

    mint, buyer, lamports, slippage = service.buy_calls[0]
    assert mint == Pubkey.from_string(token)
    assert buyer == Pubkey.from_string(account)
    assert lamports == 1 * 1_000_000_000
    assert slippage == 100


@pytest.mark.parametrize("amount, lamports", [("5", 5_000_000_000), ("0.25", 250_000_000), ("10", 10_000_000_000)])
def test_post_amount_conversion_and_fixed_slippage(client, service, token, account, amount, lamports):
    response = client.post(f"/api/pumpdotfun/{token}/{amount}", json={"account": account})

    assert response.status_code == 200
    assert service.buy_calls[-1][2:] == (lamports, 100)


def test_post_without_amount_matches_amount_one(client, service, token, account):
    without = client.post(f"/api/pumpdotfun/{token}", json={"account": account})
    with_one = client.post(f"/api/pumpdotfun/{token}/1", json={"account": account})

    assert without.status_code == with_one.status_code == 200
    assert service.buy_calls[0] == service.buy_calls[1]
    assert without.json() == with_one.json()


@pytest.mark.parametrize("body", [{"account": "not-a-key"}, {"account": ""}, {}, {"wallet": "x"}])
def test_post_rejects_malformed_account(client, service, token, body):
    response = client.post(f"/api/pumpdotfun/{token}/1", json=body)

    assert response.status_code == 422
    assert "message" in response.json()
    assert service.buy_calls == []


def test_post_rejects_invalid_amount(client, service, token, account):
    response = client.post(f"/api/pumpdotfun/{token}/-3", json={"account": account})

    assert response.status_code == 422
    assert response.status_code == InvalidParameterError.status_code
    assert service.buy_calls == []


def test_post_rejects_invalid_token(client, service, account):
    response = client.post("/api/pumpdotfun/0OIl/1", json={"account": account})

    assert response.status_code == 422
    assert service.buy_calls == []


def test_post_upstream_failure(settings, token, account):
    failing = FakeService(error=UpstreamError("pumpfun", "Bonding curve account not found"))
    app = create_app(settings)
    app.dependency_overrides[get_service] = lambda: failing
    with TestClient(app) as client:
        response = client.post(f"/api/pumpdotfun/{token}/1", json={"account": account})

    assert response.status_code == 502
    assert response.json() == {"message": "Bonding curve account not found"}


def test_openapi_document_and_swagger_ui(client):
    doc = client.get("/doc")
    assert doc.status_code == 200
    paths = doc.json()["paths"]
    assert "/api/pumpdotfun/{token}" in paths
    assert set(paths["/api/pumpdotfun/{token}/{amount}"]) == {"get", "post"}

    ui = client.get("/swagger-ui")
    assert ui.status_code == 200
    assert "/doc" in ui.text


def test_cors_preflight(client, token):
    response = client.options(
        f"/api/pumpdotfun/{token}/1",
        headers={"Origin": "https://dial.to", "Access-Control-Request-Method": "POST"},
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"
