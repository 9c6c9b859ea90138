"""Unit tests for the petition registry API routes."""

from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from petition_registry.api.middleware.logging_middleware import (
    CORRELATION_HEADER,
    LoggingMiddleware,
)
from petition_registry.api.routes.health import router as health_router
from petition_registry.api.routes.petition_registry import (
    router as petition_registry_router,
)
from petition_registry.api.routes.petition_registry import status_for_code
from petition_registry.application.services.petition_registry_service import (
    PetitionRegistryService,
)
from petition_registry.bootstrap.petition_registry import (
    set_petition_registry_service,
)
from petition_registry.domain.errors.registry import RegistryErrorCode
from petition_registry.infrastructure.stubs.fee_settlement_stub import (
    FeeSettlementStub,
)
from tests.helpers.principals import AUTHORITY, CREATOR, START_HEIGHT, STRANGER

BASE = "/v1/petition-registry"


def as_principal(principal: str) -> dict[str, str]:
    return {"X-Principal": principal}


@pytest.fixture
def app(registry_service: PetitionRegistryService) -> FastAPI:
    """Create test FastAPI app wired to a stub-backed registry service."""
    set_petition_registry_service(registry_service)
    app = FastAPI()
    app.add_middleware(LoggingMiddleware)
    app.include_router(health_router)
    app.include_router(petition_registry_router)
    return app


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def authorized_client(client: TestClient) -> TestClient:
    response = client.put(
        f"{BASE}/authority", json={"principal": AUTHORITY}, headers=as_principal(AUTHORITY)
    )
    assert response.status_code == 200
    return client


@pytest.fixture
def create_body() -> dict[str, object]:
    return {
        "title": "Test Title",
        "description": "Test Description",
        "target_signatures": 100,
        "deadline": START_HEIGHT + 1000,
        "category": "policy",
        "priority": 5,
        "location": "Test Location",
        "tags": ["tag1", "tag2"],
        "min_signatures": 10,
        "max_extension": 15,
    }


class TestStatusMapping:
    @pytest.mark.parametrize(
        ("code", "status"),
        [
            (RegistryErrorCode.NOT_AUTHORIZED, 403),
            (RegistryErrorCode.PETITION_NOT_FOUND, 404),
            (RegistryErrorCode.PETITION_CLOSED, 409),
            (RegistryErrorCode.PETITION_ALREADY_EXISTS, 409),
            (RegistryErrorCode.UPDATE_NOT_ALLOWED, 409),
            (RegistryErrorCode.MAX_PETITIONS_EXCEEDED, 409),
            (RegistryErrorCode.AUTHORITY_NOT_SET, 409),
            (RegistryErrorCode.FEE_SETTLEMENT_FAILED, 503),
            (RegistryErrorCode.PERSISTENCE_FAILED, 503),
            (RegistryErrorCode.INVALID_TITLE, 400),
            (RegistryErrorCode.INVALID_INPUT, 400),
        ],
    )
    def test_status_for_code(self, code: RegistryErrorCode, status: int) -> None:
        assert status_for_code(code) == status


class TestPrincipalHeader:
    def test_missing_principal_is_401(
        self, client: TestClient, create_body: dict[str, object]
    ) -> None:
        response = client.post(f"{BASE}/petitions", json=create_body)

        assert response.status_code == 401

    def test_blank_principal_is_401(self, client: TestClient) -> None:
        response = client.post(
            f"{BASE}/petitions/0/close", headers=as_principal("   ")
        )

        assert response.status_code == 401

    def test_reads_need_no_principal(self, client: TestClient) -> None:
        assert client.get(f"{BASE}/petitions/count").status_code == 200


class TestConfigurationRoutes:
    def test_authority_set_once(self, authorized_client: TestClient) -> None:
        response = authorized_client.put(
            f"{BASE}/authority", json={"principal": "SPOTHER"}, headers=as_principal("SPOTHER")
        )

        assert response.status_code == 409
        detail = response.json()["detail"]
        assert detail["error_code"] == 110
        assert detail["error"] == "UpdateNotAllowed"
        assert detail["status"] == 409
        assert detail["type"].endswith("UpdateNotAllowed")

    def test_fee_and_capacity(self, authorized_client: TestClient) -> None:
        fee = authorized_client.put(
            f"{BASE}/creation-fee", json={"fee": 10}, headers=as_principal(AUTHORITY)
        )
        cap = authorized_client.put(
            f"{BASE}/max-petitions", json={"max_petitions": 2}, headers=as_principal(AUTHORITY)
        )
        config = authorized_client.get(f"{BASE}/configuration").json()

        assert fee.status_code == 200
        assert cap.status_code == 200
        assert config == {
            "petition_counter": 0,
            "max_petitions": 2,
            "creation_fee": 10,
            "authority": AUTHORITY,
        }

    def test_non_authority_is_403(self, authorized_client: TestClient) -> None:
        response = authorized_client.put(
            f"{BASE}/creation-fee", json={"fee": 10}, headers=as_principal(STRANGER)
        )

        assert response.status_code == 403
        assert response.json()["detail"]["error_code"] == 100

    def test_negative_fee_is_registry_error(self, authorized_client: TestClient) -> None:
        response = authorized_client.put(
            f"{BASE}/creation-fee", json={"fee": -1}, headers=as_principal(AUTHORITY)
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error_code"] == 103


class TestPetitionRoutes:
    def test_create_and_get(
        self,
        authorized_client: TestClient,
        create_body: dict[str, object],
        fee_settlement: FeeSettlementStub,
    ) -> None:
        created = authorized_client.post(
            f"{BASE}/petitions", json=create_body, headers=as_principal(CREATOR)
        )

        assert created.status_code == 201
        assert created.json() == {"petition_id": 0}

        petition = authorized_client.get(f"{BASE}/petitions/0").json()
        assert petition["creator"] == CREATOR
        assert petition["current_signatures"] == 0
        assert petition["is_active"] is True
        assert petition["status"] == "open"
        assert petition["tags"] == ["tag1", "tag2"]
        assert fee_settlement.transfers[0].payee == AUTHORITY

    def test_create_without_authority_is_409(
        self, client: TestClient, create_body: dict[str, object]
    ) -> None:
        response = client.post(
            f"{BASE}/petitions", json=create_body, headers=as_principal(CREATOR)
        )

        assert response.status_code == 409
        assert response.json()["detail"]["error"] == "AuthorityNotSet"

    def test_invalid_category_keeps_registry_code(
        self, authorized_client: TestClient, create_body: dict[str, object]
    ) -> None:
        response = authorized_client.post(
            f"{BASE}/petitions",
            json={**create_body, "category": "sports"},
            headers=as_principal(CREATOR),
        )

        assert response.status_code == 400
        assert response.json()["detail"]["error_code"] == 113

    def test_malformed_body_is_422(
        self, authorized_client: TestClient, create_body: dict[str, object]
    ) -> None:
        response = authorized_client.post(
            f"{BASE}/petitions",
            json={**create_body, "target_signatures": "many"},
            headers=as_principal(CREATOR),
        )

        assert response.status_code == 422

    def test_duplicate_title(
        self, authorized_client: TestClient, create_body: dict[str, object]
    ) -> None:
        authorized_client.post(f"{BASE}/petitions", json=create_body, headers=as_principal(CREATOR))
        response = authorized_client.post(
            f"{BASE}/petitions", json=create_body, headers=as_principal(STRANGER)
        )

        assert response.status_code == 409
        assert response.json()["detail"]["error_code"] == 108
        assert authorized_client.get(f"{BASE}/petitions/count").json() == {"count": 1}

    def test_exists_and_update(
        self, authorized_client: TestClient, create_body: dict[str, object]
    ) -> None:
        authorized_client.post(f"{BASE}/petitions", json=create_body, headers=as_principal(CREATOR))

        response = authorized_client.put(
            f"{BASE}/petitions/0",
            json={"title": "New Title", "description": "New Description", "target_signatures": 200},
            headers=as_principal(CREATOR),
        )

        assert response.status_code == 200
        old = authorized_client.get(f"{BASE}/petitions/exists", params={"title": "Test Title"})
        new = authorized_client.get(f"{BASE}/petitions/exists", params={"title": "New Title"})
        assert old.json() == {"title": "Test Title", "exists": False}
        assert new.json() == {"title": "New Title", "exists": True}

        update = authorized_client.get(f"{BASE}/petitions/0/update").json()
        assert update["update_title"] == "New Title"
        assert update["update_target"] == 200
        assert update["updater"] == CREATOR

    def test_update_by_stranger_is_403(
        self, authorized_client: TestClient, create_body: dict[str, object]
    ) -> None:
        authorized_client.post(f"{BASE}/petitions", json=create_body, headers=as_principal(CREATOR))

        response = authorized_client.put(
            f"{BASE}/petitions/0",
            json={"title": "x", "description": "y", "target_signatures": 1},
            headers=as_principal(STRANGER),
        )

        assert response.status_code == 403

    def test_signatures_and_close(
        self, authorized_client: TestClient, create_body: dict[str, object]
    ) -> None:
        authorized_client.post(f"{BASE}/petitions", json=create_body, headers=as_principal(CREATOR))

        signed = authorized_client.post(
            f"{BASE}/petitions/0/signatures", json={"amount": 40}, headers=as_principal(STRANGER)
        )
        over = authorized_client.post(
            f"{BASE}/petitions/0/signatures", json={"amount": 61}, headers=as_principal(STRANGER)
        )
        closed = authorized_client.post(
            f"{BASE}/petitions/0/close", headers=as_principal(CREATOR)
        )
        after_close = authorized_client.post(
            f"{BASE}/petitions/0/signatures", json={"amount": 1}, headers=as_principal(STRANGER)
        )

        assert signed.status_code == 200
        assert over.status_code == 400
        assert over.json()["detail"]["error_code"] == 111
        assert closed.status_code == 200
        assert after_close.status_code == 409
        assert after_close.json()["detail"]["error"] == "PetitionClosed"
        petition = authorized_client.get(f"{BASE}/petitions/0").json()
        assert petition["current_signatures"] == 40
        assert petition["status"] == "closed"

    def test_missing_petition_is_404(self, client: TestClient) -> None:
        assert client.get(f"{BASE}/petitions/7").status_code == 404
        assert client.get(f"{BASE}/petitions/7/update").status_code == 404
        response = client.post(f"{BASE}/petitions/7/close", headers=as_principal(CREATOR))
        assert response.status_code == 404
        assert response.json()["detail"]["error_code"] == 101

    def test_settlement_failure_is_503(
        self,
        authorized_client: TestClient,
        create_body: dict[str, object],
        fee_settlement: FeeSettlementStub,
    ) -> None:
        fee_settlement.reject_with("ledger offline")

        response = authorized_client.post(
            f"{BASE}/petitions", json=create_body, headers=as_principal(CREATOR)
        )

        assert response.status_code == 503
        assert response.json()["detail"]["error"] == "FeeSettlementFailed"


class TestHealthAndCorrelation:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/v1/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "petition_count": 0}

    def test_correlation_id_echoed(self, client: TestClient) -> None:
        response = client.get("/v1/health", headers={CORRELATION_HEADER: "trace-1"})

        assert response.headers[CORRELATION_HEADER] == "trace-1"

    def test_correlation_id_generated(self, client: TestClient) -> None:
        response = client.get("/v1/health")

        assert response.headers[CORRELATION_HEADER]
