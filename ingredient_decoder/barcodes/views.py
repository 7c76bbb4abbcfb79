from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from ingredient_decoder import log_message
from ingredient_decoder.barcodes.validation import looks_like_barcode, validate_barcode
from ingredient_decoder.payload import optional_str, request_payload

# blueprint router configuration
barcodes = Blueprint("barcodes", __name__, url_prefix="/barcode")


@barcodes.route("/validate", methods=["POST"])
def validate():
    """Validate a scanned or typed code before any product lookup.

    Always answers 200; an invalid code is reported in the body.
    """
    raw = optional_str(request_payload(), "barcode") or ""
    result = validate_barcode(raw)
    if result.is_valid:
        current_app.logger.info(log_message(f"Valid {result.format} barcode {result.normalized_barcode}"))
    else:
        current_app.logger.info(log_message(f"Rejected barcode {raw!r}: {result.error}"))
    return jsonify(result.to_dict())


@barcodes.route("/looks-like", methods=["GET"])
def looks_like():
    value = request.args.get("q", "")
    return jsonify({"input": value, "looks_like_barcode": looks_like_barcode(value)})
