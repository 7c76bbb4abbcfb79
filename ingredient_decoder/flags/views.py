from __future__ import annotations

from flask import Blueprint, abort, current_app, jsonify, request

from ingredient_decoder import log_message
from ingredient_decoder.analysis.matcher import FlagType
from ingredient_decoder.analysis.synonyms import PREDEFINED_FLAGS, catalog_as_dict
from ingredient_decoder.flags import store
from ingredient_decoder.models import UserFlag
from ingredient_decoder.payload import bool_value, enum_value, optional_str, request_payload, require_str

# blueprint router configuration
flags = Blueprint("flags", __name__, url_prefix="/flags")


def _catalog_display(flag_type: FlagType, value: str) -> str | None:
    for entry in PREDEFINED_FLAGS.get(flag_type.value, ()):
        if entry["value"] == value:
            return entry["display"]
    return None


def _get_or_404(flag_id: str) -> UserFlag:
    flag = store.get_flag(flag_id)
    if flag is None:
        abort(404, description=f"Flag not found: {flag_id}")
    return flag


@flags.route("", methods=["GET"])
def list_flags():
    """List the profile's flags in stored order."""
    active_only = (request.args.get("active") or "").lower() in {"1", "true", "yes"}
    return jsonify({"flags": [f.to_dict() for f in store.list_flags(active_only=active_only)]})


@flags.route("/catalog", methods=["GET"])
def catalog():
    return jsonify(catalog_as_dict())


@flags.route("", methods=["POST"])
def add_flag():
    data = request_payload()
    flag_type = enum_value(data, "type", FlagType, FlagType.custom)
    value = require_str(data, "value")
    display_name = (
        (optional_str(data, "display_name") or "").strip()
        or _catalog_display(flag_type, value)
        or value
    )

    flag, created = store.add_flag(flag_type, value, display_name)
    if created:
        current_app.logger.info(log_message(f"Added flag {flag_type.value}:{value}"))
    return jsonify(flag.to_dict()), (201 if created else 200)


@flags.route("/<flag_id>", methods=["DELETE"])
def delete_flag(flag_id: str):
    flag = _get_or_404(flag_id)
    store.remove_flag(flag)
    current_app.logger.info(log_message(f"Removed flag {flag_id}"))
    return jsonify({"deleted": flag_id})


@flags.route("/<flag_id>/toggle", methods=["POST"])
def toggle_flag(flag_id: str):
    flag = store.toggle_flag(_get_or_404(flag_id))
    return jsonify(flag.to_dict())


@flags.route("/<flag_id>/active", methods=["POST"])
def set_flag_active(flag_id: str):
    flag = _get_or_404(flag_id)
    is_active = bool_value(request_payload(), "is_active")
    return jsonify(store.set_flag_active(flag, is_active).to_dict())
