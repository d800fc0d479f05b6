from flask import Blueprint, current_app, jsonify, request

from todoboard.label.entities import CreateLabel

bp = Blueprint("labels", __name__)


@bp.route("", methods=["POST"])
def create_label():
    """Create a new label."""
    payload = CreateLabel.model_validate(request.get_json(silent=True))
    label = current_app.label_repository.create(payload.name)
    return jsonify(label), 201


@bp.route("", methods=["GET"])
def all_labels():
    """List all labels."""
    return jsonify(current_app.label_repository.all())


@bp.route("/<int:label_id>", methods=["DELETE"])
def delete_label(label_id: int):
    """Delete a label."""
    current_app.label_repository.delete(label_id)
    return "", 204
