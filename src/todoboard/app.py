import logging

from flask import Flask, jsonify
from pydantic import ValidationError

from todoboard.config import config
from todoboard.errors import Duplicate, NotFound, RepositoryError
from todoboard.label import LabelRepository
from todoboard.logging_config import setup_logging
from todoboard.repositories import build_repositories
from todoboard.todo import TodoRepository

logger = logging.getLogger(__name__)


def create_app(
    todo_repository: TodoRepository = None,
    label_repository: LabelRepository = None,
) -> Flask:
    """
    Application factory.

    Repositories default to the configured backend; tests pass in-memory ones.
    """
    setup_logging(config.log_level, config.log_file)

    app = Flask(__name__)

    if todo_repository is None or label_repository is None:
        default_todos, default_labels = build_repositories()
        todo_repository = todo_repository or default_todos
        label_repository = label_repository or default_labels
    app.todo_repository = todo_repository
    app.label_repository = label_repository

    # Register blueprints
    from todoboard.api.labels import bp as labels_bp
    from todoboard.api.todos import bp as todos_bp

    app.register_blueprint(todos_bp, url_prefix="/todos")
    app.register_blueprint(labels_bp, url_prefix="/labels")

    @app.route("/")
    def root():
        return "Hello, World!"

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        errors = e.errors()
        return jsonify(
            {
                "error": errors[0]["msg"] if errors else "Invalid request body",
                "fields": [".".join(str(part) for part in err["loc"]) for err in errors],
            }
        ), 400

    @app.errorhandler(RepositoryError)
    def handle_repository_error(e: RepositoryError):
        if isinstance(e, NotFound):
            return jsonify({"error": e.message}), 404
        if isinstance(e, Duplicate):
            return jsonify({"error": e.message, "id": e.id}), 409
        logger.error("Repository failure: %s", e.message)
        return jsonify({"error": "Unexpected error"}), 500

    return app
