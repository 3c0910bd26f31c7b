"""Unit tests for the HTTP API."""

import base64

import pytest
from fastapi.testclient import TestClient

from famdocs.api.deps import get_document_service
from famdocs.core.config import Settings, get_settings
from famdocs.engine.models import Task
from famdocs.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=tmp_path / "data", upload_dir=tmp_path / "uploads")


@pytest.fixture
def client(settings, service):
    app = create_app(settings)
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_document_service] = lambda: service
    return TestClient(app)


# =============================================================================
# Template Endpoint Tests
# =============================================================================


class TestTemplateEndpoints:
    """Test suite for /templates."""

    def test_list(self, client):
        response = client.get("/templates")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == len(data["templates"])
        assert "facture_contestation" in {t["id"] for t in data["templates"]}
        assert "body" not in data["templates"][0]

    def test_filter_by_task_category(self, client):
        response = client.get("/templates", params={"task_category": "santé"})
        ids = {t["id"] for t in response.json()["templates"]}
        assert "sante_demande_remboursement" in ids
        assert "ecole_absence" not in ids

    def test_detail(self, client):
        response = client.get("/templates/ecole_absence")
        assert response.status_code == 200
        data = response.json()
        assert "{{absenceMotiveSentence}}" in data["body"]
        assert data["kind"] == "lettre"

    def test_detail_not_found(self, client):
        response = client.get("/templates/nope")
        assert response.status_code == 404


# =============================================================================
# Document Endpoint Tests
# =============================================================================


class TestDocumentEndpoints:
    """Test suite for /documents."""

    def test_generate(self, client, storage):
        response = client.post(
            "/documents/generate",
            json={"template_id": "attestation_domicile", "variables": {"residenceSince": "01/09/2020"}},
        )

        assert response.status_code == 200
        data = response.json()
        assert base64.b64decode(data["document_base64"]) == b"%FAKE"
        assert data["filename"].startswith("attestation_de_domicile_")
        assert data["document_url"].endswith(data["filename"])
        assert "01/09/2020" in data["content"]
        assert len(storage.uploads) == 1

    def test_generate_with_task(self, client, repository):
        repository.tasks["t1"] = Task(id="t1", title="Absence école Charles 15/12/2025")

        response = client.post(
            "/documents/generate",
            json={"template_id": "ecole_absence", "task_id": "t1"},
        )

        assert response.status_code == 200
        assert "Charles" in response.json()["content"]

    def test_generate_unknown_template(self, client):
        response = client.post("/documents/generate", json={"template_id": "nope"})
        assert response.status_code == 404

    def test_generate_requires_template_id(self, client):
        response = client.post("/documents/generate", json={})
        assert response.status_code == 422
        assert response.json()["detail"] == "Validation error"

    def test_preview(self, client, storage):
        response = client.post(
            "/documents/preview",
            json={"template_id": "sante_demande_remboursement", "variables": {"mutuelleName": "MGEN"}},
        )

        assert response.status_code == 200
        data = response.json()
        assert "mutuelleName" not in data["missing_variables"]
        assert "mutuelleRef" in data["missing_variables"]
        assert storage.uploads == []

    def test_user_id_header_is_normalized(self, client, repository):
        client.post(
            "/documents/preview",
            json={"template_id": "attestation_honneur"},
            headers={"X-User-ID": "UID_ABC123"},
        )
        assert repository.user_ids == ["uid_abc123"]

    def test_invalid_user_id_falls_back_to_default(self, client, repository):
        client.post(
            "/documents/preview",
            json={"template_id": "attestation_honneur"},
            headers={"X-User-ID": "../../etc"},
        )
        client.post("/documents/preview", json={"template_id": "attestation_honneur"})
        assert repository.user_ids == ["uid_default", "uid_default"]


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "famdocs-api", "version": "0.1.0"}
