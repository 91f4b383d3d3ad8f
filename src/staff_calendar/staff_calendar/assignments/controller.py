from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_actor, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.assignment_service

    @app.route("/assignments", methods=["GET"], endpoint="list_assignments")
    def list_assignments():
        items = service.list_for_actor(actor=current_actor())
        return jsonify([a.to_dict() for a in items])

    @app.route("/assignments/<int:assignment_id>", methods=["GET"], endpoint="get_assignment")
    def get_assignment(assignment_id: int):
        assignment = service.get_for_actor(actor=current_actor(), assignment_id=assignment_id)
        return jsonify(assignment.to_dict())

    @app.route("/assignments", methods=["POST"], endpoint="create_assignment")
    def create_assignment():
        actor = current_actor()
        data = json_body()
        assignment = service.create(
            actor=actor,
            user_id=data.get("user_id"),
            project_id=data.get("project_id"),
            start_date=data.get("start_date") or "",
            end_date=data.get("end_date") or "",
        )
        return jsonify(assignment.to_dict()), 201

    @app.route("/assignments/<int:assignment_id>", methods=["DELETE"], endpoint="remove_assignment")
    def remove_assignment(assignment_id: int):
        assignment = service.remove(actor=current_actor(), assignment_id=assignment_id)
        return jsonify(assignment.to_dict())
