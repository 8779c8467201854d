"""
Tests for the server-rendered task pages.

Form posts redirect back to /tasks (303); toggle and delete on an unknown
id are silent and redirect as well.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from src.api.routes.pages import render_tasks_page
from src.components.tasks import TaskStore


def _post(client: TestClient, url: str, data: dict[str, str] | None = None):
    return client.post(url, data=data or {}, follow_redirects=False)


class TestTasksPage:
    """GET /tasks"""

    def test_renders_tasks_and_counts(self, client: TestClient) -> None:
        response = client.get("/tasks")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        html = response.text
        assert "3 task(s) shown" in html
        assert "1/3 completed (33%)" in html
        for title in ("A", "B", "C"):
            assert f'<span class="title">{title}</span>' in html
        assert 'class="error"' not in html

    def test_filter_pending(self, client: TestClient) -> None:
        html = client.get("/tasks", params={"status": "pending"}).text

        assert "2 task(s) shown" in html
        assert '<span class="title">C</span>' not in html
        assert "<strong>Pending</strong>" in html

    def test_titles_are_escaped(self, client: TestClient, seeded_store: TaskStore) -> None:
        seeded_store.create("<script>alert(1)</script>")
        html = client.get("/tasks").text

        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html


class TestCreateForm:
    """POST /tasks"""

    def test_create_redirects(self, client: TestClient, seeded_store: TaskStore) -> None:
        response = _post(client, "/tasks", {"title": "  D "})

        assert response.status_code == 303
        assert response.headers["location"] == "/tasks"
        assert seeded_store.get(4).title == "D"

    def test_blank_title_rerenders_with_error(
        self, client: TestClient, seeded_store: TaskStore
    ) -> None:
        response = _post(client, "/tasks", {"title": "   "})

        assert response.status_code == 400
        assert "title must not be empty" in response.text
        assert "3 task(s) shown" in response.text
        assert len(seeded_store) == 3

    def test_missing_title_field(self, client: TestClient) -> None:
        response = _post(client, "/tasks")

        assert response.status_code == 400
        assert "title must not be empty" in response.text


class TestToggleForm:
    """POST /tasks/{id}/toggle"""

    def test_toggle_existing(self, client: TestClient, seeded_store: TaskStore) -> None:
        response = _post(client, "/tasks/1/toggle")

        assert response.status_code == 303
        assert response.headers["location"] == "/tasks"
        assert seeded_store.get(1).done is True

    def test_toggle_missing_still_redirects(
        self, client: TestClient, seeded_store: TaskStore
    ) -> None:
        before = [t.model_copy() for t in seeded_store.list()]
        response = _post(client, "/tasks/99/toggle")

        assert response.status_code == 303
        assert seeded_store.list() == before

    def test_toggle_non_integer_id_redirects(self, client: TestClient) -> None:
        assert _post(client, "/tasks/abc/toggle").status_code == 303


class TestDeleteForm:
    """POST /tasks/{id}/delete"""

    def test_delete_existing(self, client: TestClient, seeded_store: TaskStore) -> None:
        response = _post(client, "/tasks/2/delete")

        assert response.status_code == 303
        assert [t.id for t in seeded_store.list()] == [1, 3]

    def test_delete_missing_still_redirects(
        self, client: TestClient, seeded_store: TaskStore
    ) -> None:
        response = _post(client, "/tasks/99/delete")

        assert response.status_code == 303
        assert len(seeded_store) == 3


class TestBulkForms:
    """POST /tasks/complete-all and /tasks/clear-completed"""

    def test_complete_all(self, client: TestClient, seeded_store: TaskStore) -> None:
        response = _post(client, "/tasks/complete-all")

        assert response.status_code == 303
        assert all(t.done for t in seeded_store.list())

    def test_clear_completed(self, client: TestClient, seeded_store: TaskStore) -> None:
        response = _post(client, "/tasks/clear-completed")

        assert response.status_code == 303
        assert [t.title for t in seeded_store.list()] == ["A", "B"]

    def test_follow_redirect_shows_list(self, client: TestClient) -> None:
        response = client.post("/tasks/complete-all")

        assert response.status_code == 200
        assert "3/3 completed (100%)" in response.text


class TestStaticPages:
    """Home, about, contact, static assets and 404."""

    def test_home_greets_configured_user(self, client: TestClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        assert "Welcome, Guest!" in response.text

    def test_about_and_contact(self, client: TestClient) -> None:
        assert client.get("/about").status_code == 200
        contact = client.get("/contact")
        assert contact.status_code == 200
        assert "hello@example.com" in contact.text

    def test_stylesheet_served(self, client: TestClient) -> None:
        response = client.get("/static/style.css")

        assert response.status_code == 200
        assert "text/css" in response.headers["content-type"]

    def test_unknown_page_renders_404(self, client: TestClient) -> None:
        response = client.get("/no/such/page")

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/html")
        assert "Page not found" in response.text

    @pytest.mark.parametrize(
        "url", ["/tasks/1/toggle", "/tasks/1/delete", "/tasks/complete-all", "/tasks/clear-completed"]
    )
    def test_get_on_form_route_renders_404(self, client: TestClient, url: str) -> None:
        response = client.get(url)

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/html")
        assert "Page not found" in response.text

    def test_path_sharing_api_prefix_renders_404_page(self, client: TestClient) -> None:
        response = client.get("/apiary")

        assert response.status_code == 404
        assert response.headers["content-type"].startswith("text/html")
        assert "Page not found" in response.text


class TestRenderTasksPage:
    """Pure rendering helper."""

    def test_empty_list(self) -> None:
        from src.domain.entities import TaskStats

        html = render_tasks_page((), TaskStats())

        assert "No tasks." in html
        assert "0/0 completed (0%)" in html

    def test_error_slot(self) -> None:
        from src.domain.entities import TaskStats

        html = render_tasks_page((), TaskStats(), error="bad <input>")
        assert "bad &lt;input&gt;" in html
