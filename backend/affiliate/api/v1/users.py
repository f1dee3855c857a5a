from flask import jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from affiliate.application.admin.users import create_user, delete_user, get_user, update_user
from affiliate.models.user import User
from affiliate.normalizers.user import normalize_user
from affiliate.utils.decorators import admin_required
from . import v1_bp


@v1_bp.route("/users", methods=["GET"])
@jwt_required()
@admin_required
def list_users():
    users = User.query.order_by(User.email.asc()).all()
    return jsonify({"items": [normalize_user(user) for user in users]}), 200


@v1_bp.route("/users", methods=["POST"])
@jwt_required()
@admin_required
def create_user_route():
    user = create_user(data=request.get_json(silent=True) or {}, actor_id=get_jwt_identity())
    return jsonify(normalize_user(user)), 201


@v1_bp.route("/users/<user_id>", methods=["GET"])
@jwt_required()
@admin_required
def get_user_route(user_id):
    return jsonify(normalize_user(get_user(user_id))), 200


@v1_bp.route("/users/<user_id>", methods=["PUT", "PATCH"])
@jwt_required()
@admin_required
def update_user_route(user_id):
    user = update_user(user_id=user_id, data=request.get_json(silent=True) or {}, actor_id=get_jwt_identity())
    return jsonify(normalize_user(user)), 200


@v1_bp.route("/users/<user_id>", methods=["DELETE"])
@jwt_required()
@admin_required
def delete_user_route(user_id):
    delete_user(user_id=user_id, actor_id=get_jwt_identity())
    return jsonify({"message": "User deleted successfully"}), 200
