"""
Flask REST API routes for the tutoring marketplace.

This module provides HTTP endpoints for:
- Registration and login
- Posting assignments, bidding, delivering and approving work
- Tutor work lists and payouts
- Administrator user lists and platform analytics

The acting user is identified by the ``X-User-Id`` header. There is no real
authentication, only identification.

To run the server:
    FLASK_APP=tutoring_platform.api.routes:create_app flask run
"""

import json
import os
from typing import Optional

from flask import Flask, g, jsonify, request

from ..config import PlatformConfig, load_config
from ..errors import (
    DuplicateBidError,
    DuplicateEmailError,
    InvalidTransitionError,
    MarketplaceError,
    MissingTutorError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from ..models.user import UserRole
from ..session import USER_KEY, ClientSession, MemorySessionState
from ..storage.base import DataStore
from .client import MarketplaceClient, build_store
from .schemas import (
    ACCEPT_BID_SCHEMA,
    CREATE_ASSIGNMENT_SCHEMA,
    CREATE_BID_SCHEMA,
    LOGIN_SCHEMA,
    REGISTER_SCHEMA,
    SUBMIT_WORK_SCHEMA,
    validate_body,
)

ERROR_STATUS = {
    NotFoundError: 404,
    DuplicateBidError: 409,
    DuplicateEmailError: 409,
    InvalidTransitionError: 409,
    ValidationError: 400,
    UnauthorizedError: 403,
    MissingTutorError: 500,
}


def _status_for(error: MarketplaceError) -> int:
    for error_type, status in ERROR_STATUS.items():
        if isinstance(error, error_type):
            return status
    return 500


def create_app(config: Optional[PlatformConfig] = None, store: Optional[DataStore] = None) -> Flask:
    """Create and configure the Flask application."""
    config = config or load_config()
    store = store if store is not None else build_store(config)

    app = Flask(__name__)
    app.config["PLATFORM"] = config
    app.config["STORE"] = store

    @app.before_request
    def init_client():
        state = MemorySessionState()
        user_id = request.headers.get("X-User-Id")
        if user_id:
            user = store.users.get(user_id)
            if user is None:
                raise UnauthorizedError(f"Unknown user: {user_id}")
            state.set(USER_KEY, json.dumps(user.to_dict()))
        g.client = MarketplaceClient(store, ClientSession(store, state), config)

    @app.errorhandler(MarketplaceError)
    def handle_marketplace_error(error: MarketplaceError):
        status = _status_for(error)
        if status == 500:
            app.logger.error("Marketplace invariant violated: %s", error)
        return jsonify({"error": type(error).__name__, "message": str(error)}), status

    # === Health Check ===

    @app.route("/health", methods=["GET"])
    def health():
        """Health check endpoint."""
        return jsonify({"status": "healthy", "version": "0.1.0"})

    # === Auth ===

    @app.route("/api/v1/auth/login", methods=["POST"])
    def login():
        body = validate_body(request.get_json(silent=True), LOGIN_SCHEMA)
        user = g.client.login(body["email"], body.get("password", ""))
        if user is None:
            return jsonify({"error": "LoginFailed", "message": "Invalid email or password"}), 401
        return jsonify({"user": user.to_dict()})

    @app.route("/api/v1/auth/register", methods=["POST"])
    def register():
        body = validate_body(request.get_json(silent=True), REGISTER_SCHEMA)
        user = g.client.register(
            body["name"], body["email"], body.get("password", ""), UserRole(body["role"])
        )
        return jsonify({"user": user.to_dict()}), 201

    # === Assignments ===

    @app.route("/api/v1/assignments", methods=["GET"])
    def list_assignments():
        """Assignments visible to the acting user's role."""
        assignments = g.client.get_assignments()
        return jsonify({"assignments": [a.to_dict() for a in assignments]})

    @app.route("/api/v1/assignments", methods=["POST"])
    def create_assignment():
        body = validate_body(request.get_json(silent=True), CREATE_ASSIGNMENT_SCHEMA)
        assignment = g.client.create_assignment(
            title=body["title"],
            subject=body["subject"],
            description=body["description"],
            deadline=body["deadline"],
            budget=body["budget"],
            file_url=body.get("file_url"),
        )
        return jsonify(assignment.to_dict()), 201

    @app.route("/api/v1/assignments/<assignment_id>", methods=["GET"])
    def get_assignment(assignment_id: str):
        return jsonify(g.client.get_assignment(assignment_id).to_dict())

    @app.route("/api/v1/assignments/<assignment_id>/bids", methods=["GET"])
    def list_bids(assignment_id: str):
        bids = g.client.get_bids_for_assignment(assignment_id)
        return jsonify({"bids": [b.to_dict() for b in bids]})

    @app.route("/api/v1/assignments/<assignment_id>/bids", methods=["POST"])
    def create_bid(assignment_id: str):
        body = validate_body(request.get_json(silent=True), CREATE_BID_SCHEMA)
        bid = g.client.create_bid(assignment_id, body["amount"], body["proposal"])
        return jsonify(bid.to_dict()), 201

    @app.route("/api/v1/assignments/<assignment_id>/accept", methods=["POST"])
    def accept_bid(assignment_id: str):
        body = validate_body(request.get_json(silent=True), ACCEPT_BID_SCHEMA)
        assignment = g.client.accept_bid(assignment_id, body["bid_id"])
        return jsonify(assignment.to_dict())

    @app.route("/api/v1/assignments/<assignment_id>/submit", methods=["POST"])
    def submit_work(assignment_id: str):
        body = validate_body(request.get_json(silent=True), SUBMIT_WORK_SCHEMA)
        assignment = g.client.submit_work(assignment_id, body["file_name"])
        return jsonify(assignment.to_dict())

    @app.route("/api/v1/assignments/<assignment_id>/complete", methods=["POST"])
    def complete_assignment(assignment_id: str):
        assignment = g.client.complete_assignment(assignment_id)
        return jsonify(assignment.to_dict())

    # === Tutors ===

    @app.route("/api/v1/tutor/work", methods=["GET"])
    def tutor_work():
        work = g.client.get_tutor_assignments()
        return jsonify({
            "active": [a.to_dict() for a in work.active],
            "completed": [a.to_dict() for a in work.completed],
        })

    @app.route("/api/v1/tutor/payments", methods=["GET"])
    def tutor_payments():
        payments = g.client.get_tutor_payments()
        return jsonify({"payments": [p.to_dict() for p in payments]})

    # === Admin ===

    @app.route("/api/v1/admin/users", methods=["GET"])
    def all_users():
        return jsonify({"users": [u.to_dict() for u in g.client.get_all_users()]})

    @app.route("/api/v1/admin/assignments", methods=["GET"])
    def all_assignments():
        assignments = g.client.get_all_assignments()
        return jsonify({"assignments": [a.to_dict() for a in assignments]})

    @app.route("/api/v1/admin/analytics", methods=["GET"])
    def analytics():
        return jsonify(g.client.get_platform_analytics().to_dict())

    return app


def main():
    """Run the API server."""
    app = create_app()
    port = int(os.environ.get("PORT", 8000))
    debug = os.environ.get("DEBUG", "false").lower() == "true"

    print(f"Starting tutoring marketplace API on port {port}")
    app.run(host="0.0.0.0", port=port, debug=debug)


if __name__ == "__main__":
    main()
