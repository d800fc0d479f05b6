from flask import Blueprint, current_app, jsonify, request

from todoboard.todo.entities import CreateTodo, UpdateTodo

bp = Blueprint("todos", __name__)


@bp.route("", methods=["POST"])
def create_todo():
    """Create a new todo."""
    payload = CreateTodo.model_validate(request.get_json(silent=True))
    todo = current_app.todo_repository.create(payload)
    return jsonify(todo), 201


@bp.route("", methods=["GET"])
def all_todos():
    """List all todos with their labels."""
    return jsonify(current_app.todo_repository.all())


@bp.route("/<int:todo_id>", methods=["GET"])
def find_todo(todo_id: int):
    """Get todo by ID."""
    return jsonify(current_app.todo_repository.find(todo_id))


@bp.route("/<int:todo_id>", methods=["PATCH"])
def update_todo(todo_id: int):
    """Partially update a todo."""
    payload = UpdateTodo.model_validate(request.get_json(silent=True))
    return jsonify(current_app.todo_repository.update(todo_id, payload))


@bp.route("/<int:todo_id>", methods=["DELETE"])
def delete_todo(todo_id: int):
    """Delete a todo."""
    current_app.todo_repository.delete(todo_id)
    return "", 204
