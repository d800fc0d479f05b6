"""
Tests for the Flask HTTP layer, backed by in-memory repositories.

Run with: pytest src/todoboard/app_test.py -v
"""

from unittest.mock import MagicMock

import pytest

from todoboard.app import create_app
from todoboard.errors import Unexpected
from todoboard.todo import CreateTodo


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.get_data(as_text=True) == "Hello, World!"


class TestTodos:
    """Tests for the /todos endpoints"""

    def test_create_todo(self, client, memory_sample_labels):
        response = client.post("/todos", json={"text": "buy milk", "label_ids": [1]})

        assert response.status_code == 201
        assert response.get_json() == {
            "id": 1,
            "text": "buy milk",
            "completed": False,
            "labels": [{"id": 1, "name": "work"}],
        }

    @pytest.mark.parametrize(
        "body",
        [
            {"text": ""},
            {"text": "x" * 101},
            {"label_ids": [1]},
            {"text": "a", "label_ids": "1"},
            {"text": "a", "label_ids": ["1"]},
            {"text": "a", "label_ids": [True]},
        ],
    )
    def test_create_todo_invalid(self, client, body):
        response = client.post("/todos", json=body)

        assert response.status_code == 400
        assert "error" in response.get_json()

    def test_create_todo_with_huge_label_id(self, client, memory_sample_labels):
        response = client.post("/todos", json={"text": "t", "label_ids": [2**40, 2]})

        assert response.status_code == 201
        assert response.get_json()["labels"] == [{"id": 2, "name": "home"}]

    def test_create_todo_without_body(self, client):
        response = client.post("/todos", data="not json", content_type="text/plain")

        assert response.status_code == 400

    def test_find_todo(self, client, memory_todo_repo):
        memory_todo_repo.create(CreateTodo(text="some todo text"))

        response = client.get("/todos/1")

        assert response.status_code == 200
        assert response.get_json() == {
            "id": 1,
            "text": "some todo text",
            "completed": False,
            "labels": [],
        }

    def test_find_todo_not_found(self, client):
        response = client.get("/todos/1")

        assert response.status_code == 404

    def test_all_todos(self, client, memory_todo_repo):
        memory_todo_repo.create(CreateTodo(text="first"))
        memory_todo_repo.create(CreateTodo(text="second"))

        response = client.get("/todos")

        assert response.status_code == 200
        assert sorted(todo["text"] for todo in response.get_json()) == ["first", "second"]

    def test_update_todo(self, client, memory_todo_repo, memory_sample_labels):
        memory_todo_repo.create(CreateTodo(text="some todo text", label_ids=[1]))

        response = client.patch("/todos/1", json={"completed": True})

        assert response.status_code == 200
        assert response.get_json() == {
            "id": 1,
            "text": "some todo text",
            "completed": True,
            "labels": [{"id": 1, "name": "work"}],
        }

    def test_update_todo_clears_labels(self, client, memory_todo_repo, memory_sample_labels):
        memory_todo_repo.create(CreateTodo(text="t", label_ids=[1, 2]))

        response = client.patch("/todos/1", json={"label_ids": []})

        assert response.get_json()["labels"] == []

    def test_update_todo_not_found(self, client):
        response = client.patch("/todos/1", json={"text": "x"})

        assert response.status_code == 404

    def test_update_todo_invalid(self, client, memory_todo_repo):
        memory_todo_repo.create(CreateTodo(text="t"))

        response = client.patch("/todos/1", json={"completed": "yes"})

        assert response.status_code == 400

    def test_delete_todo(self, client, memory_todo_repo):
        memory_todo_repo.create(CreateTodo(text="t"))

        response = client.delete("/todos/1")

        assert response.status_code == 204
        assert client.get("/todos/1").status_code == 404

    def test_delete_todo_not_found(self, client):
        response = client.delete("/todos/1")

        assert response.status_code == 404


class TestLabels:
    """Tests for the /labels endpoints"""

    def test_create_label(self, client):
        response = client.post("/labels", json={"name": "some label"})

        assert response.status_code == 201
        assert response.get_json() == {"id": 1, "name": "some label"}

    def test_create_label_duplicate(self, client, memory_label_repo):
        memory_label_repo.create("work")

        response = client.post("/labels", json={"name": "work"})

        assert response.status_code == 409
        assert response.get_json()["id"] == 1

    @pytest.mark.parametrize("body", [{"name": ""}, {"name": "x" * 21}, {}])
    def test_create_label_invalid(self, client, body):
        response = client.post("/labels", json=body)

        assert response.status_code == 400

    def test_all_labels(self, client, memory_sample_labels):
        response = client.get("/labels")

        assert response.status_code == 200
        assert [label["name"] for label in response.get_json()] == ["work", "home", "urgent"]

    def test_delete_label(self, client, memory_label_repo):
        memory_label_repo.create("work")

        response = client.delete("/labels/1")

        assert response.status_code == 204
        assert client.get("/labels").get_json() == []

    def test_delete_label_not_found(self, client):
        response = client.delete("/labels/1")

        assert response.status_code == 404


def test_unexpected_error_maps_to_500(memory_label_repo):
    todo_repo = MagicMock()
    todo_repo.all.side_effect = Unexpected("connection refused")
    app = create_app(todo_repo, memory_label_repo)

    response = app.test_client().get("/todos")

    assert response.status_code == 500
    assert response.get_json() == {"error": "Unexpected error"}
