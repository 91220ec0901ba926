"""HTTP level tests for the DOCX endpoint."""

from __future__ import annotations

import base64
from io import BytesIO

import pytest
from docx import Document
from fastapi.testclient import TestClient

from app.api.deps import get_docx_generator
from app.core.config import settings
from app.docx_encoder import DocumentEncodingError
from app.main import app


class FailingGenerator:
    """Generator stub whose encoder always fails."""

    def generate(self, text: str):
        raise DocumentEncodingError("broken numbering reference")


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_generate_returns_base64_document(client: TestClient) -> None:
    response = client.post("/generate-docx", json={"text": "<p>**Hello** world</p>"})

    assert response.status_code == 200
    payload = base64.b64decode(response.json()["file"])
    assert payload.startswith(b"PK")
    document = Document(BytesIO(payload))
    assert document.paragraphs[0].text == "Hello world"


def test_generate_download_returns_raw_bytes(client: TestClient) -> None:
    response = client.post("/generate-docx?download=true", json={"text": "plain"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    )
    assert response.headers["content-disposition"] == 'attachment; filename="output.docx"'
    assert response.content.startswith(b"PK")


def test_download_flag_must_be_exactly_true(client: TestClient) -> None:
    response = client.post("/generate-docx?download=1", json={"text": "plain"})

    assert response.status_code == 200
    assert "file" in response.json()


@pytest.mark.parametrize("body", [{"text": 5}, {"text": None}, {"text": ["a"]}, {}])
def test_non_string_text_is_rejected(client: TestClient, body: dict) -> None:
    response = client.post("/generate-docx", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": 'Input "text" must be a string.'}


def test_generation_failure_hides_details(client: TestClient) -> None:
    app.dependency_overrides[get_docx_generator] = FailingGenerator

    response = client.post("/generate-docx", json={"text": "x"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate docx."}


def test_oversized_body_is_rejected(client: TestClient) -> None:
    body = b'{"text": "' + b"a" * settings.max_body_bytes + b'"}'

    response = client.post("/generate-docx", content=body, headers={"Content-Type": "application/json"})

    assert response.status_code == 413


def test_oversized_chunked_body_is_rejected(client: TestClient) -> None:
    def chunks():
        yield b'{"text": "'
        yield b"a" * settings.max_body_bytes
        yield b'"}'

    response = client.post("/generate-docx", content=chunks(), headers={"Content-Type": "application/json"})

    assert response.status_code == 413
    assert response.json() == {"error": "Request body too large."}
