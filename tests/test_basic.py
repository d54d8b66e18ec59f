# Basic tests
from livenotes import __version__


def test_api_root_endpoint(client):
    """Test the API root endpoint."""
    response = client.get("/api/")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "LiveNotes API"
    assert data["endpoints"]["live"] == "/api/live/notes"


def test_health_endpoint(client):
    """Test health check."""
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == __version__
    assert data["checks"]["notes"]["count"] == 0


def test_cors_preflight(client):
    response = client.options(
        "/api/notes",
        headers={"Origin": "http://example.com", "Access-Control-Request-Method": "POST"},
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] in ("*", "http://example.com")


def test_models_import():
    """Test that models can be imported."""
    from livenotes.core.models import Note, Snapshot, User

    user = User(username="alice", password_hash="x")
    note = Note(content="hello", author_id=user.id)
    assert note.to_public() == {"id": note.id, "content": "hello", "authorId": user.id}
    assert Snapshot(version=0, notes=()).to_public() == []
    assert "password_hash" not in repr(user)
