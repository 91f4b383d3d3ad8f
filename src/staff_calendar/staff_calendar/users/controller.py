from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.authorization import Action, ensure_allowed, facts_for
from ..common.http import current_actor
from ..container import Container


def register(app: Flask, container: Container) -> None:
    vouchers = container.meal_voucher_service

    @app.route("/users/<int:user_id>/meal-vouchers/<month>", methods=["GET"], endpoint="meal_vouchers")
    def meal_vouchers(user_id: int, month: str):
        actor = current_actor()
        ensure_allowed(
            Action.READ_MEAL_VOUCHERS,
            actor.role,
            facts_for(owner=actor.is_(user_id)),
            "You can only view your own meal vouchers",
        )
        summary = vouchers.monthly_worked_days(
            user_id=user_id,
            month=month,
            year=request.args.get("year") or None,
        )
        return jsonify(summary.to_dict())
