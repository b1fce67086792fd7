# tripscout/routes/travel.py
"""Travel routes and blueprint configuration."""

import dataclasses
import logging

from flask import Blueprint, current_app, jsonify, request

from tripscout.api.errors import (
    OperationError,
    PhotoLookupError,
    TransportError,
)
from tripscout.api.models import Coordinates, Suggestion, TravelPlan, suggestions_to_dicts
from tripscout.api.planner import generate_more, generate_travel_plan
from tripscout.api.services.plan_service import PlanService
from tripscout.api.services.share_service import ShareService
from tripscout.api.validation import validation_failure

logger = logging.getLogger(__name__)

# URL slug -> extension category
EXTENSION_KINDS = {
    "attractions": "attractions",
    "hidden-gems": "hidden_gems",
    "activities": "activities",
}


def _error_status(error: OperationError) -> int:
    if isinstance(error.kind, TransportError):
        return 503
    return 502


def create_travel_blueprint():
    """Create and configure the travel blueprint.

    The chat transport and the optional photo service are read from
    ``current_app.config["TRANSPORT"]`` and ``current_app.config["PHOTOS"]``.

    Returns:
        Configured Flask Blueprint
    """
    travel_bp = Blueprint("travel", __name__, url_prefix="/travel")

    @travel_bp.route("/api/plan", methods=["POST"])
    def api_plan():
        """Generate a full travel plan."""
        try:
            plan_request = PlanService.plan_request_from_json(request.get_json(silent=True))
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

        result = generate_travel_plan(current_app.config["TRANSPORT"], plan_request)
        if not result.ok:
            return jsonify({"error": str(result.error)}), _error_status(result.error)

        plan = result.value
        photos = current_app.config.get("PHOTOS")
        if photos is not None:
            plan = dataclasses.replace(
                plan,
                must_see_attractions=photos.enrich_suggestions(plan.must_see_attractions),
                hidden_gems=photos.enrich_suggestions(plan.hidden_gems),
            )
        return jsonify(plan.to_dict())

    @travel_bp.route("/api/more/<kind>", methods=["POST"])
    def api_more(kind):
        """Load five more attractions, hidden gems or activities."""
        category = EXTENSION_KINDS.get(kind)
        if category is None:
            return jsonify({"error": f"Unknown category: {kind}"}), 404

        data = request.get_json(silent=True)
        existing = []
        if isinstance(data, dict) and isinstance(data.get("existing"), list):
            existing = [Suggestion.from_dict(i) for i in data["existing"] if isinstance(i, dict)]
            data = dict(data, existingTitles=PlanService.existing_titles(existing))
        try:
            ext_request = PlanService.extension_request_from_json(data)
        except ValueError as e:
            return jsonify({"error": str(e)}), 400

        result = generate_more(current_app.config["TRANSPORT"], category, ext_request)
        if not result.ok:
            return jsonify({"error": str(result.error)}), _error_status(result.error)

        body = {"items": suggestions_to_dicts(result.value)}
        if existing:
            body["merged"] = suggestions_to_dicts(PlanService.append_batch(existing, result.value))
        return jsonify(body)

    @travel_bp.route("/api/photos", methods=["POST"])
    def api_photos():
        """Return photo URLs for coordinates or a free-text location."""
        photos = current_app.config.get("PHOTOS")
        if photos is None:
            return jsonify({"error": "No Google Maps API key configured"}), 500

        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400
        coords = Coordinates.from_dict(data.get("coordinates"))
        location = data.get("location")
        try:
            if coords is not None:
                urls = photos.get_place_photos(coords)
            elif isinstance(location, str) and location:
                urls = photos.get_location_photos(location)
            else:
                return jsonify({"error": "coordinates or location is required"}), 400
        except PhotoLookupError as e:
            return jsonify({"error": str(e)}), 404
        except TransportError as e:
            return jsonify({"error": str(e)}), 503
        return jsonify({"photos": urls})

    @travel_bp.route("/api/share", methods=["POST"])
    def api_share():
        """Render a plan as shareable text."""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400
        payload = data.get("plan")
        reason = validation_failure(payload)
        if reason:
            return jsonify({"error": f"Invalid plan: {reason}"}), 400
        try:
            plan = TravelPlan.from_dict(payload)
        except ValueError as e:
            return jsonify({"error": f"Invalid plan: {e}"}), 400
        text = ShareService.format_plan_for_sharing(plan, data.get("language", "en"))
        return jsonify({"text": text})

    @travel_bp.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok", "service": "travel"})

    return travel_bp


__all__ = ["create_travel_blueprint"]
