"""Tests for health and reset endpoints."""

from fastapi import status

from hottakes.core.settings import settings


def test_root_and_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/").json()["name"] == "Hot Takes API"

    body = client.get("/api/v1/system/health").json()
    assert body["status"] == "ok"
    assert body["version"] == settings.app_version


def test_reset_is_hidden_by_default(client, monkeypatch) -> None:
    monkeypatch.setattr(settings, "enable_test_reset", False)

    response = client.delete("/api/v1/system/reset")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_reset_clears_everything(client, monkeypatch, auth_token, test_post) -> None:
    post_id = test_post.id
    monkeypatch.setattr(settings, "enable_test_reset", True)

    response = client.delete("/api/v1/system/reset")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"cleared": True}

    assert client.get("/api/v1/users/").json() == []
    assert client.get(f"/api/v1/posts/{post_id}").status_code == status.HTTP_404_NOT_FOUND
