import pytest
from fastapi.testclient import TestClient

from docportal.core.config import Settings
from docportal.main import create_app

PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\n%%EOF\n"


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def settings(tmp_path, upload_dir):
    """Isolated settings: a fresh SQLite file and upload directory per test."""
    return Settings(
        _env_file=None,
        DATABASE_URL=f"sqlite:///{tmp_path / 'db.sqlite3'}",
        UPLOAD_DIR=str(upload_dir),
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    yield app
    app.state.engine.dispose()


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest.fixture
def upload(client):
    """Post a file to the upload endpoint and return the response."""

    def _upload(name="report.pdf", content=PDF_BYTES, content_type="application/pdf"):
        return client.post("/documents/upload", files={"file": (name, content, content_type)})

    return _upload
