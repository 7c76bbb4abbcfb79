from __future__ import annotations

from flask import Blueprint, abort, current_app, jsonify, request
from sqlalchemy import func, select

from ingredient_decoder import db, log_message
from ingredient_decoder.analysis.views import analysis_response, run_analysis
from ingredient_decoder.barcodes.validation import validate_barcode
from ingredient_decoder.models import ScanRecord
from ingredient_decoder.payload import optional_str, request_payload

# blueprint router configuration
history = Blueprint("history", __name__)


def _paging_context(total: int, page: int | None) -> dict:
    per_page = current_app.config["HISTORY_PER_PAGE"]
    total_pages = max(1, (total + per_page - 1) // per_page)
    page = max(1, min(int(page or 1), total_pages))
    return {
        "page": page,
        "per_page": per_page,
        "total": total,
        "total_pages": total_pages,
        "offset": (page - 1) * per_page,
    }


def _get_or_404(record_id: str) -> ScanRecord:
    record = db.session.get(ScanRecord, record_id)
    if record is None:
        abort(404, description=f"Scan not found: {record_id}")
    return record


@history.route("/scan", methods=["POST"])
def scan():
    """Validate an optional barcode, analyse the ingredients and record the result."""
    data = request_payload()

    barcode = (optional_str(data, "barcode") or "").strip()
    barcode_value = None
    barcode_format = None
    if barcode:
        validation = validate_barcode(barcode)
        if not validation.is_valid:
            current_app.logger.info(log_message(f"Scan rejected, bad barcode {barcode!r}: {validation.error}"))
            return jsonify({"ok": False, "validation": validation.to_dict()}), 200
        barcode_value = validation.normalized_barcode
        barcode_format = validation.format

    result = run_analysis(data)
    record = ScanRecord.from_analysis(
        result,
        raw_ingredients=optional_str(data, "ingredients_text"),
        product_name=(optional_str(data, "product_name") or "").strip() or None,
        barcode=barcode_value,
        barcode_format=barcode_format,
    )

    try:
        db.session.add(record)
        db.session.commit()
    except Exception:
        # Still hand the verdict back even if the history write fails.
        db.session.rollback()
        current_app.logger.exception("Failed to persist scan")
        return jsonify({"ok": True, "scan": None, "analysis": analysis_response(result)}), 200

    current_app.logger.info(
        log_message(f"Recorded scan {record.id}: {result.overall_status.value} ({result.flagged_count} flagged)")
    )
    return jsonify({"ok": True, "scan": record.to_dict(), "analysis": analysis_response(result)}), 201


@history.route("/history", methods=["GET"])
def history_list():
    """Recorded scans, newest first."""
    page_arg = request.args.get("page")
    page = int(page_arg) if page_arg and page_arg.isdecimal() else None

    total = db.session.scalar(select(func.count()).select_from(ScanRecord)) or 0
    paging = _paging_context(total, page)
    records = db.session.scalars(
        select(ScanRecord)
        .order_by(ScanRecord.created_at.desc())
        .offset(paging["offset"])
        .limit(paging["per_page"])
    )
    return jsonify({
        "items": [r.to_dict() for r in records],
        "page": paging["page"],
        "total": paging["total"],
        "total_pages": paging["total_pages"],
    })


@history.route("/history/<record_id>", methods=["GET"])
def history_detail(record_id: str):
    return jsonify(_get_or_404(record_id).to_dict())


@history.route("/history/<record_id>", methods=["DELETE"])
def history_delete(record_id: str):
    record = _get_or_404(record_id)
    db.session.delete(record)
    db.session.commit()
    current_app.logger.info(log_message(f"Deleted scan {record_id}"))
    return jsonify({"deleted": record_id})
