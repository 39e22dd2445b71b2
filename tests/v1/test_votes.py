"""Tests for vote endpoints."""

from fastapi import status


def _vote(client, post_id, value, headers):
    return client.post(f"/api/v1/posts/{post_id}/vote", json={"value": value}, headers=headers)


def test_agree_with_post(client, auth_token, test_post) -> None:
    """Test agreeing with a post."""
    response = _vote(client, test_post.id, "AGREE", auth_token)
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["votes"] == {"agree": 1, "disagree": 0}
    assert body["user_vote"] == "AGREE"
    assert body["controversy_score"] == 0.0


def test_vote_toggle_and_flip(client, auth_token, test_post) -> None:
    """Test that repeating a vote removes it and the other value flips it."""
    _vote(client, test_post.id, "AGREE", auth_token)

    body = _vote(client, test_post.id, "DISAGREE", auth_token).json()
    assert body["votes"] == {"agree": 0, "disagree": 1}
    assert body["user_vote"] == "DISAGREE"

    body = _vote(client, test_post.id, "DISAGREE", auth_token).json()
    assert body["votes"] == {"agree": 0, "disagree": 0}
    assert body["user_vote"] is None

    response = client.get(f"/api/v1/posts/{test_post.id}/my-vote", headers=auth_token)
    assert response.json() == {"value": None}


def test_controversy_between_two_voters(client, auth_token, other_auth_token, test_post) -> None:
    _vote(client, test_post.id, "AGREE", auth_token)
    body = _vote(client, test_post.id, "DISAGREE", other_auth_token).json()

    assert body["controversy_score"] == 1.0

    feed = client.get("/api/v1/posts/", headers=auth_token).json()
    assert feed["posts"][0]["user_vote"] == "AGREE"
    assert feed["posts"][0]["votes"] == {"agree": 1, "disagree": 1}


def test_my_vote(client, auth_token, test_post) -> None:
    _vote(client, test_post.id, "AGREE", auth_token)

    response = client.get(f"/api/v1/posts/{test_post.id}/my-vote", headers=auth_token)
    assert response.json() == {"value": "AGREE"}

    response = client.get(f"/api/v1/posts/{test_post.id}/my-vote")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_vote_invalid_value(client, auth_token, test_post) -> None:
    """Test voting with a value outside AGREE/DISAGREE."""
    response = _vote(client, test_post.id, "UPVOTE", auth_token)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"detail": "invalid vote type", "code": "INVALID_INPUT"}


def test_vote_nonexistent_post(client, auth_token) -> None:
    """Test voting on a non-existent post."""
    response = _vote(client, 99999, "AGREE", auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_vote_unauthenticated(client, test_post) -> None:
    """Test voting without authentication."""
    response = _vote(client, test_post.id, "AGREE", None)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["detail"] == "must be logged in to vote"


def test_vote_publishes_update(client, auth_token, test_post, published) -> None:
    _vote(client, test_post.id, "DISAGREE", auth_token)

    assert published == [
        ("post_updated", {"post_id": test_post.id, "votes": {"agree": 0, "disagree": 1}}),
    ]


def test_my_vote_on_deleted_post(client, auth_token, other_auth_token, test_post) -> None:
    """Test that a removed post no longer reports the caller's vote."""
    post_id = test_post.id
    _vote(client, post_id, "AGREE", auth_token)
    client.delete(f"/api/v1/posts/{post_id}", headers=other_auth_token)

    response = client.get(f"/api/v1/posts/{post_id}/my-vote", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["code"] == "NOT_FOUND"

    response = client.get("/api/v1/posts/99999/my-vote", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND
