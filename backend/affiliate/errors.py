from flask import jsonify, render_template, request
from werkzeug.exceptions import HTTPException, NotFound

from affiliate.application.admin.errors import EntityNotFound, SlugConflict
from affiliate.domain.invariants.exceptions import InvariantViolation
from affiliate.domain.lifecycle.content import IllegalTransition
from affiliate.domain.validation import ValidationError


def _wants_json():
    return request.path.startswith("/api/")


def register_error_handlers(app):
    @app.errorhandler(IllegalTransition)
    def handle_illegal_transition(error):
        response = jsonify({
            "error": "IllegalTransition",
            "message": str(error)
        })
        response.status_code = 400
        return response

    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        response = jsonify({
            "error": "InvariantViolation",
            "message": str(error)
        })
        response.status_code = 400
        return response

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        response = jsonify({
            "error": "ValidationError",
            "message": str(error),
            "fields": error.fields
        })
        response.status_code = 400
        return response

    @app.errorhandler(EntityNotFound)
    def handle_entity_not_found(error):
        return jsonify({"error": "NotFound", "message": str(error)}), 404

    @app.errorhandler(SlugConflict)
    def handle_slug_conflict(error):
        return jsonify({"error": "Conflict", "message": str(error)}), 409

    @app.errorhandler(NotFound)
    def handle_not_found(error):
        if _wants_json():
            return jsonify({"error": "Not found"}), 404
        return render_template("404.html"), 404

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        if not _wants_json():
            return error
        response = jsonify({
            "error": error.name,
            "message": error.description
        })
        response.status_code = error.code
        return response
