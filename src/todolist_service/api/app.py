"""
Flask REST API for todolist-service.

Authenticates each request from its bearer token, hands the resulting
CallerIdentity to the access decision engine, and renders the outcome.
"""

from __future__ import annotations

import logging
import time

from flask import Flask, jsonify, request

from ..access import AccessDecisionEngine
from ..access.engine import READ_ALL_ROLE
from ..config import Settings
from ..errors import Forbidden, InvalidRequest, NotFound, TodoListError
from ..identity.claims import authenticate
from ..identity.models import CallerIdentity
from ..policy import PolicyRegistry
from ..todos import Todo, TodoStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    store: TodoStore | None = None,
    policy_registry: PolicyRegistry | None = None,
    access_engine: AccessDecisionEngine | None = None,
) -> Flask:
    """Create and configure the Flask application."""

    app = Flask(__name__)

    cfg = settings or Settings.from_env()
    policies = policy_registry or PolicyRegistry()
    if cfg.policy_file and policy_registry is None:
        policies.load_file(cfg.policy_file)
    access = access_engine or AccessDecisionEngine(
        store=store if store is not None else TodoStore(),
        policies=policies,
        strict_ownership=cfg.strict_ownership,
        decision_log_size=cfg.decision_log_size,
    )
    app.config["TODOLIST_SETTINGS"] = cfg
    app.extensions["todolist_access"] = access

    def caller() -> CallerIdentity:
        identity = authenticate(request.headers.get("Authorization"), cfg)
        if cfg.seed_sample_data:
            access.store.seed_if_empty(identity.name)
        return identity

    def json_object() -> dict:
        data = request.get_json(silent=True)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise InvalidRequest("request body must be a JSON object")
        return data

    @app.errorhandler(TodoListError)
    def handle_todolist_error(exc: TodoListError):
        return jsonify(exc.to_dict()), exc.status_code

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "healthy", "timestamp": time.time()})

    # --- To-do items ---

    @app.route("/todos", methods=["GET"])
    def list_todos():
        todos = access.list_todos(caller())
        return jsonify([t.to_dict() for t in todos])

    @app.route("/todos/<int:todo_id>", methods=["GET"])
    def get_todo(todo_id: int):
        todo = access.get_todo(caller(), todo_id)
        if todo is None:
            return jsonify({"error": "todo_not_found", "message": f"todo {todo_id} not found"}), 404
        return jsonify(todo.to_dict())

    @app.route("/todos", methods=["POST"])
    def create_todo():
        identity = caller()
        data = json_object()
        title = data.get("title", data.get("Title", ""))
        todo = access.create_todo(identity, str(title or ""))
        return jsonify(todo.to_dict())

    @app.route("/todos/<int:todo_id>", methods=["PATCH"])
    def update_todo(todo_id: int):
        identity = caller()
        try:
            body = Todo.from_dict(json_object())
        except (TypeError, ValueError) as exc:
            raise NotFound(f"body id missing or not an integer for todo {todo_id}") from exc
        todo = access.update_todo(identity, todo_id, body)
        return jsonify(todo.to_dict())

    @app.route("/todos/<int:todo_id>", methods=["DELETE"])
    def delete_todo(todo_id: int):
        removed = access.delete_todo(caller(), todo_id)
        return jsonify({"status": "deleted" if removed else "not_found_noop", "id": todo_id})

    # --- Access decisions ---

    def require_read_all(identity: CallerIdentity) -> None:
        if not identity.has_role(READ_ALL_ROLE):
            raise Forbidden(f"requires role {READ_ALL_ROLE}")

    @app.route("/access/decisions", methods=["GET"])
    def access_decisions():
        require_read_all(caller())
        n = request.args.get("n", 50, type=int)
        return jsonify({"decisions": access.recent_decisions(n)})

    @app.route("/access/stats", methods=["GET"])
    def access_stats():
        require_read_all(caller())
        return jsonify({"decisions": access.decision_stats(), "store": access.store.summary()})

    logger.debug("app_created strict_ownership=%s seed=%s", cfg.strict_ownership, cfg.seed_sample_data)
    return app
