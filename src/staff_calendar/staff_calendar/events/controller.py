from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_actor, int_field, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.event_service

    @app.route("/events", methods=["GET"], endpoint="list_events")
    def list_events():
        current_actor()
        return jsonify([e.to_dict() for e in service.list_all()])

    @app.route("/events/<int:event_id>", methods=["GET"], endpoint="get_event")
    def get_event(event_id: int):
        current_actor()
        return jsonify(service.get(event_id).to_dict())

    @app.route("/events", methods=["POST"], endpoint="create_event")
    def create_event():
        actor = current_actor()
        data = json_body()
        event = service.create(
            actor=actor,
            event_date=data.get("date") or "",
            event_type=data.get("event_type") or "",
            description=data.get("description"),
            user_id=int_field(data, "user_id") if data.get("user_id") is not None else None,
        )
        return jsonify(event.to_dict()), 201

    @app.route("/events/<int:event_id>/validate", methods=["POST"], endpoint="validate_event")
    def validate_event(event_id: int):
        event = service.validate(approver=current_actor(), event_id=event_id)
        return jsonify(event.to_dict())

    @app.route("/events/<int:event_id>/decline", methods=["POST"], endpoint="decline_event")
    def decline_event(event_id: int):
        event = service.decline(approver=current_actor(), event_id=event_id)
        return jsonify(event.to_dict())

    @app.route("/events/<int:event_id>", methods=["DELETE"], endpoint="cancel_event")
    def cancel_event(event_id: int):
        event = service.cancel(actor=current_actor(), event_id=event_id)
        return jsonify(event.to_dict())
