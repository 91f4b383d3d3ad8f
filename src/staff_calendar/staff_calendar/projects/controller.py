from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_actor, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.project_service

    @app.route("/projects", methods=["GET"], endpoint="list_projects")
    def list_projects():
        items = service.list_for_actor(actor=current_actor())
        return jsonify([p.to_dict() for p in items])

    @app.route("/projects", methods=["POST"], endpoint="create_project")
    def create_project():
        actor = current_actor()
        data = json_body()
        project = service.create(
            actor=actor,
            name=data.get("name") or "",
            description=data.get("description"),
            referring_employee_id=data.get("referring_employee_id"),
        )
        return jsonify(project.to_dict()), 201

    @app.route("/projects/<int:project_id>", methods=["GET"], endpoint="get_project")
    def get_project(project_id: int):
        project = service.get_for_actor(actor=current_actor(), project_id=project_id)
        return jsonify(project.to_dict())

    @app.route("/projects/<int:project_id>", methods=["PATCH"], endpoint="update_project")
    def update_project(project_id: int):
        actor = current_actor()
        data = json_body()
        referrer = data.get("referring_employee_id") if "referring_employee_id" in data else None
        project = service.update(
            actor=actor,
            project_id=project_id,
            name=data.get("name"),
            description=data.get("description"),
            referring_employee_id=referrer,
        )
        return jsonify(project.to_dict())

    @app.route("/projects/<int:project_id>", methods=["DELETE"], endpoint="archive_project")
    def archive_project(project_id: int):
        project = service.archive(actor=current_actor(), project_id=project_id)
        return jsonify(project.to_dict())
