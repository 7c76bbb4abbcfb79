from __future__ import annotations

from typing import Any

from flask import Blueprint, abort, current_app, jsonify

from ingredient_decoder import log_message
from ingredient_decoder.analysis.matcher import (
    AnalysisPolicy,
    AnalysisResult,
    IngredientFlag,
    VeganStatus,
    VegetarianStatus,
    analyze_product,
    status_presentation,
)
from ingredient_decoder.flags.store import profile_flags
from ingredient_decoder.payload import enum_value, optional_str, request_payload, str_list

# blueprint router configuration
analysis = Blueprint("analysis", __name__)


def _request_flags(data: dict[str, Any]) -> list[IngredientFlag]:
    raw = data.get("flags")
    if raw is None:
        return profile_flags()
    if not isinstance(raw, list):
        abort(400, description="'flags' must be a list of flag objects.")
    try:
        return [IngredientFlag.from_dict(item) for item in raw]
    except (AttributeError, KeyError, TypeError, ValueError):
        abort(400, description="Each flag needs a 'value', a known 'type' and a boolean 'is_active' if given.")


def run_analysis(data: dict[str, Any]) -> AnalysisResult:
    """Analyse the ingredient fields of a request body with the configured policy."""
    return analyze_product(
        optional_str(data, "ingredients_text") or "",
        allergens=str_list(data, "allergens"),
        additives=str_list(data, "additives"),
        vegan_status=enum_value(data, "vegan_status", VeganStatus, VeganStatus.unknown),
        vegetarian_status=enum_value(data, "vegetarian_status", VegetarianStatus, VegetarianStatus.unknown),
        user_flags=_request_flags(data),
        policy=AnalysisPolicy.from_config(current_app.config),
    )


def analysis_response(result: AnalysisResult) -> dict[str, Any]:
    return {**result.to_dict(), **status_presentation(result.overall_status)}


@analysis.route("/analyze", methods=["POST"])
def analyze():
    """Analyse ingredient text without recording it."""
    result = run_analysis(request_payload())
    current_app.logger.info(
        log_message(f"Analysis: {result.overall_status.value} ({result.flagged_count} flagged)")
    )
    return jsonify(analysis_response(result))


@analysis.route("/status/<status>", methods=["GET"])
def status_metadata(status: str):
    """Presentation metadata for one status; unknown values get the neutral fallback."""
    return jsonify({"status": status, **status_presentation(status)})
