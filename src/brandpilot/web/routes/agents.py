from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify, request

from brandpilot.agents.caller import AgentCallRequest

logger = logging.getLogger(__name__)

agents_bp = Blueprint("agents", __name__)

API_KEY_HEADER = "x-ai-api-key"


@agents_bp.after_request
def add_cors_headers(response):
    """Allow cross-origin requests from the pipeline builder."""
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Headers"] = f"Content-Type, {API_KEY_HEADER}"
    response.headers["Access-Control-Allow-Methods"] = "POST, OPTIONS"
    return response


@agents_bp.route("/execute-node", methods=["OPTIONS"])
def execute_node_preflight():
    """Handle CORS preflight for node execution."""
    return "", 204


@agents_bp.route("/execute-node", methods=["POST"])
def execute_node():
    """Run one agent node and return its JSON output."""
    api_key = request.headers.get(API_KEY_HEADER, "")
    if not api_key:
        return jsonify({
            "success": False,
            "error": "API key is required. Add your key in Settings.",
        }), 401

    data = request.get_json(silent=True)
    if not isinstance(data, dict) or "type" not in data:
        return jsonify({"success": False, "error": "type is required"}), 400
    try:
        call_request = AgentCallRequest.from_dict(data)
    except (KeyError, TypeError, ValueError) as exc:
        return jsonify({"success": False, "error": f"Invalid request: {exc}"}), 400

    factory = current_app.extensions["caller_factory"]
    caller = factory(call_request.provider, api_key)
    try:
        result = caller.call(call_request)
    finally:
        close = getattr(caller, "close", None)
        if close is not None:
            close()

    if not result.success:
        logger.warning("execute-node failed for %s: %s", call_request.node_type, result.error)
    return jsonify(result.to_dict())
