from flask import current_app, request, jsonify
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    get_jwt_identity,
    jwt_required,
)
from affiliate.extensions import db
from affiliate.models.user import User
from affiliate.normalizers.user import normalize_user
from . import v1_bp


def _claims(user):
    return {
        "role": user.role,
        "site_ids": [site.id for site in user.sites],
    }


@v1_bp.route("/auth/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not data:
        return jsonify({"error": "Invalid request body"}), 400

    email = (data.get("email") or "").strip().lower()
    password = data.get("password")

    if not email or not password:
        return jsonify({"error": "Email and password required"}), 400

    user = User.query.filter_by(email=email).first()

    if not user or not user.check_password(password):
        current_app.logger.info("Failed login for %s", email)
        return jsonify({"error": "Invalid credentials"}), 401

    if not user.is_active:
        return jsonify({"error": "User account disabled"}), 403

    access_token = create_access_token(identity=user.id, additional_claims=_claims(user))
    refresh_token = create_refresh_token(identity=user.id)

    return jsonify({
        "access_token": access_token,
        "refresh_token": refresh_token,
        "user": normalize_user(user)
    }), 200


@v1_bp.route("/auth/refresh", methods=["POST"])
@jwt_required(refresh=True)
def refresh():
    # Claims are rebuilt so role and site changes apply on refresh
    user = db.session.get(User, get_jwt_identity())
    if not user or not user.is_active:
        return jsonify({"error": "User account disabled"}), 403

    return jsonify({
        "access_token": create_access_token(identity=user.id, additional_claims=_claims(user))
    }), 200


@v1_bp.route("/auth/me", methods=["GET"])
@jwt_required()
def me():
    user = db.session.get(User, get_jwt_identity())
    if not user:
        return jsonify({"error": "User not found"}), 404
    return jsonify(normalize_user(user)), 200
