from __future__ import annotations

import csv
import io
import logging
from functools import wraps

from flask import Flask, jsonify, request, session

from ..common.validators import parse_action, parse_period
from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    BreakCapExceeded,
    DomainError,
    InvalidTransition,
    StorageError,
    ValidationError,
)
from ..container import Container

logger = logging.getLogger(__name__)


def _error_response(e: DomainError):
    if isinstance(e, (InvalidTransition, BreakCapExceeded)):
        code = 409
    elif isinstance(e, ValidationError):
        code = 400
    elif isinstance(e, AuthorizationError):
        code = 403
    elif isinstance(e, StorageError):
        logger.exception("storage failure")
        return jsonify({"success": False, "message": "Ошибка хранилища, попробуйте позже"}), 503
    else:
        code = 400
    return jsonify({"success": False, "message": str(e)}), code


def register(app: Flask, container: Container) -> None:
    service = container.tracking_service

    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "message": "Требуется авторизация"}), 401
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "message": "Требуется авторизация"}), 401
            if session.get("role") != Role.ADMIN.value:
                return _error_response(AuthorizationError("У вас нет прав для доступа к админ-панели"))
            return view(*args, **kwargs)

        return wrapper

    @app.route("/api/actions/<action>", methods=["POST"], endpoint="perform_action")
    @login_required
    def perform_action(action: str):
        try:
            result = service.perform_action(int(session["user_id"]), parse_action(action))
        except DomainError as e:
            return _error_response(e)
        return jsonify(
            {
                "success": True,
                "message": result.message,
                "status": result.user.status.value,
                "break_start_time": result.user.break_start_time.isoformat() if result.user.break_start_time else None,
                "timestamp": result.event.timestamp.isoformat(),
            }
        ), 200

    @app.route("/api/me/summary", methods=["GET"], endpoint="me_summary")
    @login_required
    def me_summary():
        try:
            summary = service.day_summary(int(session["user_id"]))
        except DomainError as e:
            return _error_response(e)
        return jsonify({"success": True, "data": summary.to_dict()}), 200

    @app.route("/api/admin/stats", methods=["GET"], endpoint="admin_stats")
    @admin_required
    def admin_stats():
        try:
            stats = service.stats()
        except DomainError as e:
            return _error_response(e)
        return jsonify({"success": True, "data": stats.to_dict()}), 200

    @app.route("/api/admin/users", methods=["GET"], endpoint="admin_users")
    @admin_required
    def admin_users():
        try:
            rows = service.list_users_with_break_time()
        except DomainError as e:
            return _error_response(e)
        return jsonify({"success": True, "data": rows}), 200

    @app.route("/api/admin/users/<int:user_id>/logs", methods=["GET"], endpoint="admin_user_logs")
    @admin_required
    def admin_user_logs(user_id: int):
        try:
            period = parse_period(request.args.get("period"))
            rows = service.get_user_logs(user_id, period)
        except DomainError as e:
            return _error_response(e)
        return jsonify({"success": True, "period": period.value, "data": rows}), 200

    @app.route("/api/admin/logs", methods=["GET"], endpoint="admin_logs")
    @admin_required
    def admin_logs():
        try:
            period = parse_period(request.args.get("period"))
            rows = service.get_all_logs(period)
        except DomainError as e:
            return _error_response(e)
        return jsonify({"success": True, "period": period.value, "data": rows}), 200

    @app.route("/api/admin/logs.csv", methods=["GET"], endpoint="admin_logs_csv")
    @admin_required
    def admin_logs_csv():
        try:
            period = parse_period(request.args.get("period"))
            rows = service.get_all_logs(period)
        except DomainError as e:
            return _error_response(e)

        out = io.StringIO()
        writer = csv.DictWriter(
            out,
            fieldnames=["local_time", "user_id", "user_name", "user_email", "action", "action_label"],
            extrasaction="ignore",
        )
        writer.writeheader()
        for row in rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=time_logs_{period.value}.csv"},
        )
