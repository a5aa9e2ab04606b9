# tests/v1/test_posts.py
"""Tests for post-related endpoints."""

from fastapi import status

from shutter_stage.models import AuditLogStatus, PostStatus, PostTag, Tag


def test_index_sets_total_count_header(client, test_user, make_post) -> None:
    """Listing returns one page and the total in the header."""
    for _ in range(3):
        make_post(test_user)

    response = client.get("/api/v1/posts/", params={"page": "2"})

    assert response.status_code == status.HTTP_200_OK
    assert response.headers["X-Total-Count"] == "3"
    assert response.json() == []


def test_index_first_page(client, test_user, make_post) -> None:
    post = make_post(test_user, tags=["street"])

    response = client.get("/api/v1/posts/")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [item["id"] for item in data] == [post.id]
    assert data[0]["user"] == {"id": test_user.id, "name": "alice"}
    assert data[0]["tags"][0]["name"] == "street"
    assert data[0]["liked"] is False


def test_index_exposes_total_count_header_for_cors(client) -> None:
    response = client.get("/api/v1/posts/", headers={"Origin": "http://example.com"})

    assert "x-total-count" in response.headers["access-control-expose-headers"].lower()


def test_index_rejects_unknown_status(client) -> None:
    response = client.get("/api/v1/posts/", params={"status": "deleted"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Invalid post status"


def test_index_unknown_audit_status_matches_nothing(client, test_user, make_post) -> None:
    make_post(test_user, audits=[AuditLogStatus.APPROVED])

    response = client.get("/api/v1/posts/", params={"auditStatus": "rejected"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []
    assert response.headers["X-Total-Count"] == "0"


def test_index_non_numeric_user_matches_nothing(client, test_user, make_post) -> None:
    make_post(test_user)

    response = client.get("/api/v1/posts/", params={"user": "alice", "action": "published"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []
    assert response.headers["X-Total-Count"] == "0"


def test_index_page_beyond_store_range_is_empty(client, test_user, make_post) -> None:
    make_post(test_user)
    make_post(test_user)

    response = client.get("/api/v1/posts/", params={"page": "100000000000000000000"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []
    assert response.headers["X-Total-Count"] == "2"


def test_index_public_mode_ignores_status(client, test_user, make_post) -> None:
    make_post(test_user, status=PostStatus.DRAFT)
    published = make_post(test_user)

    response = client.get("/api/v1/posts/", params={"status": "draft"})

    assert [item["id"] for item in response.json()] == [published.id]


def test_index_manage_mode_uses_token_identity(
    client, test_user, other_user, auth_token, make_post
) -> None:
    mine = make_post(test_user, status=PostStatus.DRAFT)
    make_post(other_user, status=PostStatus.DRAFT)

    response = client.get(
        "/api/v1/posts/",
        params={"manage": "true", "admin": "true"},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_200_OK
    assert [item["id"] for item in response.json()] == [mine.id]
    assert response.headers["X-Total-Count"] == "1"


def test_index_admin_manage_mode(
    client, test_user, other_user, admin_auth_token, make_post
) -> None:
    first = make_post(test_user, status=PostStatus.DRAFT)
    second = make_post(other_user, status=PostStatus.ARCHIVED)

    response = client.get(
        "/api/v1/posts/",
        params={"manage": "true", "admin": "true", "sort": "earliest"},
        headers=admin_auth_token,
    )

    assert [item["id"] for item in response.json()] == [first.id, second.id]


def test_index_rejects_invalid_token(client) -> None:
    response = client.get("/api/v1/posts/", headers={"Authorization": "Bearer nope"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_show_approved_post_to_anonymous(client, test_user, make_post) -> None:
    post = make_post(test_user, audits=[AuditLogStatus.APPROVED])

    response = client.get(f"/api/v1/posts/{post.id}")

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["id"] == post.id
    assert data["audit"]["status"] == "approved"


def test_show_unaudited_post_is_forbidden(client, test_user, other_auth_token, make_post) -> None:
    post = make_post(test_user)

    response = client.get(f"/api/v1/posts/{post.id}", headers=other_auth_token)

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_show_recency_beats_existence(client, test_user, make_post) -> None:
    post = make_post(test_user, audits=[AuditLogStatus.APPROVED, AuditLogStatus.DENIED])

    response = client.get(f"/api/v1/posts/{post.id}")

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_show_own_draft(client, test_user, auth_token, make_post) -> None:
    post = make_post(test_user, status=PostStatus.DRAFT, with_file=False)

    response = client.get(f"/api/v1/posts/{post.id}", headers=auth_token)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["file"] is None


def test_show_any_post_to_admin(client, test_user, admin_auth_token, make_post) -> None:
    post = make_post(test_user, status=PostStatus.DRAFT, audits=[AuditLogStatus.DENIED])

    response = client.get(f"/api/v1/posts/{post.id}", headers=admin_auth_token)

    assert response.status_code == status.HTTP_200_OK


def test_show_missing_post(client) -> None:
    response = client.get("/api/v1/posts/99999")

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Post not found"


def test_create_post(client, test_user, auth_token) -> None:
    response = client.post(
        "/api/v1/posts/",
        json={"title": "Sunset", "content": "Shot at f/8"},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["title"] == "Sunset"
    assert data["status"] == "draft"
    assert data["user"]["id"] == test_user.id


def test_create_post_requires_authentication(client) -> None:
    response = client.post("/api/v1/posts/", json={"title": "Sunset"})

    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_update_own_post(client, test_user, auth_token, make_post) -> None:
    post = make_post(test_user, status=PostStatus.DRAFT)

    response = client.patch(
        f"/api/v1/posts/{post.id}",
        json={"status": "published", "title": "Renamed"},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "published"
    assert response.json()["title"] == "Renamed"


def test_update_rejects_unknown_status(client, test_user, auth_token, make_post) -> None:
    post = make_post(test_user)

    response = client.patch(
        f"/api/v1/posts/{post.id}",
        json={"status": "deleted"},
        headers=auth_token,
    )

    assert response.status_code == 422


def test_update_other_post_is_forbidden(client, test_user, other_auth_token, make_post) -> None:
    post = make_post(test_user)

    response = client.patch(
        f"/api/v1/posts/{post.id}",
        json={"title": "Mine now"},
        headers=other_auth_token,
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert "own posts" in response.json()["detail"]


def test_admin_can_update_any_post(client, test_user, admin_auth_token, make_post) -> None:
    post = make_post(test_user)

    response = client.patch(
        f"/api/v1/posts/{post.id}",
        json={"status": "archived"},
        headers=admin_auth_token,
    )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "archived"


def test_delete_own_post(client, test_user, auth_token, make_post) -> None:
    post = make_post(test_user)

    response = client.delete(f"/api/v1/posts/{post.id}", headers=auth_token)

    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/api/v1/posts/{post.id}", headers=auth_token).status_code == 404


def test_delete_other_post(client, test_user, other_auth_token, make_post) -> None:
    post = make_post(test_user)

    response = client.delete(f"/api/v1/posts/{post.id}", headers=other_auth_token)

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_delete_nonexistent_post(client, auth_token) -> None:
    response = client.delete("/api/v1/posts/99999", headers=auth_token)

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_store_post_tag(client, db_session, test_user, auth_token, make_post) -> None:
    post = make_post(test_user)

    response = client.post(
        f"/api/v1/posts/{post.id}/tag",
        json={"name": "street"},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_201_CREATED
    tag_id = response.json()["id"]
    assert db_session.get(PostTag, (post.id, tag_id)) is not None


def test_store_duplicate_post_tag(client, test_user, auth_token, make_post) -> None:
    post = make_post(test_user, tags=["street"])

    response = client.post(
        f"/api/v1/posts/{post.id}/tag",
        json={"name": "street"},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Post already has this tag"


def test_destroy_post_tag(client, db_session, test_user, auth_token, make_post) -> None:
    post = make_post(test_user, tags=["street"])
    tag = db_session.query(Tag).filter(Tag.name == "street").one()

    response = client.request(
        "DELETE",
        f"/api/v1/posts/{post.id}/tag",
        json={"tagId": tag.id},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert db_session.get(PostTag, (post.id, tag.id)) is None


def test_destroy_missing_post_tag(client, test_user, auth_token, make_post) -> None:
    post = make_post(test_user)

    response = client.request(
        "DELETE",
        f"/api/v1/posts/{post.id}/tag",
        json={"tagId": 404},
        headers=auth_token,
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Tag not found"
