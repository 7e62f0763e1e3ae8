"""
Integration tests for the /tasks endpoints.

Covers listing (filter, search, sort, pagination), creation defaults,
patching and idempotent deletion through the FastAPI TestClient.
"""

import pytest


def descriptions(response):
    return [t["description"] for t in response.json()["tasks"]]


@pytest.fixture
def add_task(client, auth_headers):
    """Create a task as the default user and return it."""

    def _add(**fields):
        response = client.post("/tasks", headers=auth_headers, json=fields)
        assert response.status_code == 200, response.text
        return response.json()

    return _add


# ─────────────────────────────────────────────────────────────────────────────
# Create
# ─────────────────────────────────────────────────────────────────────────────


class TestCreateTask:
    def test_defaults(self, add_task):
        task = add_task(description="Call the bank", priority="sooner")

        assert task["status"] == "created"
        assert task["updateDate"] == ""
        assert task["taskId"]
        assert task["creationDate"].endswith("Z")

    def test_explicit_status(self, add_task):
        assert add_task(description="x", status="done")["status"] == "done"

    def test_server_assigns_id(self, add_task):
        task = add_task(description="x", taskId="chosen", creationDate="2000-01-01T00:00:00Z")

        assert task["taskId"] != "chosen"
        assert task["creationDate"] != "2000-01-01T00:00:00Z"

    def test_extra_fields_are_stored(self, client, auth_headers, add_task):
        task = add_task(description="x", color="teal")

        stored = client.get(f"/tasks/{task['taskId']}", headers=auth_headers).json()
        assert stored["color"] == "teal"

    def test_invalid_priority_is_422(self, client, auth_headers):
        response = client.post("/tasks", headers=auth_headers, json={"description": "x", "priority": "urgent"})

        assert response.status_code == 422

    def test_requires_identity(self, client):
        assert client.post("/tasks", json={"description": "x"}).status_code == 401


# ─────────────────────────────────────────────────────────────────────────────
# List
# ─────────────────────────────────────────────────────────────────────────────


class TestListTasks:
    def test_default_filter_is_created(self, client, auth_headers, add_task):
        add_task(description="open")
        add_task(description="finished", status="done")

        response = client.get("/tasks", headers=auth_headers)

        assert response.status_code == 200
        assert descriptions(response) == ["open"]
        assert response.json()["paginationAmount"] == 1

    def test_filter_and_search(self, client, auth_headers, add_task):
        add_task(description="Pay BANK fees", status="done")
        add_task(description="bank statement", status="archived")
        add_task(description="bank call")
        add_task(description="groceries", status="done")

        response = client.get("/tasks", headers=auth_headers, params={"filter": "done,archived", "search": "bank"})

        assert descriptions(response) == ["Pay BANK fees", "bank statement"]

    def test_priority_sorts(self, client, auth_headers, add_task):
        add_task(description="a", priority="later")
        add_task(description="b", priority="maybe never")
        add_task(description="c", priority="sooner")
        add_task(description="d", priority="later")

        asc = client.get("/tasks", headers=auth_headers, params={"sort": "priorityAsc"})
        desc = client.get("/tasks", headers=auth_headers, params={"sort": "priorityDesc"})

        assert descriptions(asc) == ["c", "a", "d", "b"]
        assert descriptions(desc) == ["b", "a", "d", "c"]

    def test_date_sort(self, client, auth_headers, add_task):
        for name in ("first", "second", "third"):
            add_task(description=name)

        response = client.get("/tasks", headers=auth_headers, params={"sort": "dateOlderFirst"})

        assert descriptions(response) == ["first", "second", "third"]

    def test_unknown_sort_keeps_insertion_order(self, client, auth_headers, add_task):
        add_task(description="b", priority="later")
        add_task(description="a", priority="sooner")

        response = client.get("/tasks", headers=auth_headers, params={"sort": "alphabetical"})

        assert descriptions(response) == ["b", "a"]

    def test_first_page_of_twenty(self, client, auth_headers, add_task):
        for i in range(20):
            add_task(description=f"task {i}")

        response = client.get("/tasks", headers=auth_headers, params={"p": 1})

        assert len(response.json()["tasks"]) == 9
        assert response.json()["paginationAmount"] == 3

    def test_pages_are_cumulative(self, client, auth_headers, add_task):
        for i in range(20):
            add_task(description=f"task {i}")

        response = client.get("/tasks", headers=auth_headers, params={"p": 2})

        assert len(response.json()["tasks"]) == 18

    def test_page_zero_is_422(self, client, auth_headers):
        assert client.get("/tasks", headers=auth_headers, params={"p": 0}).status_code == 422

    def test_users_do_not_see_each_other(self, client, signup, add_task):
        add_task(description="alice's")
        bob = signup(email="bob@example.com", name="Bob")

        response = client.get("/tasks", headers=bob["headers"])

        assert response.json() == {"paginationAmount": 0, "tasks": []}


# ─────────────────────────────────────────────────────────────────────────────
# Read / Patch / Delete
# ─────────────────────────────────────────────────────────────────────────────


class TestSingleTask:
    def test_read_missing_task_is_404(self, client, auth_headers):
        response = client.get("/tasks/nope", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "Task not found", "code": "NOT_FOUND"}

    def test_patch(self, client, auth_headers, add_task):
        task = add_task(description="draft", priority="later")

        response = client.patch(
            f"/tasks/{task['taskId']}",
            headers=auth_headers,
            json={"description": "final", "status": "done", "taskId": "other"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["description"] == "final"
        assert data["status"] == "done"
        assert data["priority"] == "later"
        assert data["taskId"] == task["taskId"]
        assert data["creationDate"] == task["creationDate"]

    def test_patch_missing_task_leaves_list_unchanged(self, client, auth_headers, add_task):
        add_task(description="keep me")
        before = client.get("/tasks", headers=auth_headers).json()

        response = client.patch("/tasks/missing", headers=auth_headers, json={"status": "done"})

        assert response.status_code == 404
        assert client.get("/tasks", headers=auth_headers).json() == before

    def test_double_delete(self, client, auth_headers, add_task):
        keep = add_task(description="keep")
        gone = add_task(description="gone")

        first = client.delete(f"/tasks/{gone['taskId']}", headers=auth_headers)
        after_first = client.get("/tasks", headers=auth_headers).json()
        second = client.delete(f"/tasks/{gone['taskId']}", headers=auth_headers)

        assert first.status_code == 204
        assert second.status_code == 204
        assert client.get("/tasks", headers=auth_headers).json() == after_first
        assert [t["taskId"] for t in after_first["tasks"]] == [keep["taskId"]]

    def test_other_users_task_is_404(self, client, signup, add_task):
        task = add_task(description="private")
        bob = signup(email="bob@example.com", name="Bob")

        assert client.get(f"/tasks/{task['taskId']}", headers=bob["headers"]).status_code == 404
