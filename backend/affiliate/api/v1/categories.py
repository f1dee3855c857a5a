from flask import jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from affiliate.application.admin.categories import (
    create_category,
    delete_category,
    duplicate_category,
    update_category,
)
from affiliate.application.admin.common import get_for_site
from affiliate.models import ArticleCategory, Category
from affiliate.normalizers.category import normalize_category
from affiliate.utils.decorators import site_access_required
from . import v1_bp


def _list(model, site_id):
    query = model.query.filter_by(site_id=site_id)
    if model is Category and request.args.get("category_type"):
        query = query.filter_by(category_type=request.args["category_type"])
    rows = query.order_by(model.sort_order.asc(), model.name.asc()).all()
    return jsonify({"items": [normalize_category(c) for c in rows]})


# ------------------------
# Product categories
# ------------------------

@v1_bp.route("/sites/<site_id>/categories", methods=["GET"])
@jwt_required()
@site_access_required
def list_categories(site_id):
    return _list(Category, site_id)


@v1_bp.route("/sites/<site_id>/categories", methods=["POST"])
@jwt_required()
@site_access_required
def create_category_route(site_id):
    category = create_category(
        site_id=site_id,
        data=request.get_json(silent=True) or {},
        actor_id=get_jwt_identity(),
    )
    return jsonify(normalize_category(category)), 201


@v1_bp.route("/sites/<site_id>/categories/<category_id>", methods=["GET"])
@jwt_required()
@site_access_required
def get_category(site_id, category_id):
    category = get_for_site(Category, site_id=site_id, entity_id=category_id, label="Category")
    return jsonify(normalize_category(category))


@v1_bp.route("/sites/<site_id>/categories/<category_id>", methods=["PUT", "PATCH"])
@jwt_required()
@site_access_required
def update_category_route(site_id, category_id):
    category = update_category(
        site_id=site_id,
        category_id=category_id,
        data=request.get_json(silent=True) or {},
        actor_id=get_jwt_identity(),
    )
    return jsonify(normalize_category(category))


@v1_bp.route("/sites/<site_id>/categories/<category_id>", methods=["DELETE"])
@jwt_required()
@site_access_required
def delete_category_route(site_id, category_id):
    delete_category(site_id=site_id, category_id=category_id, actor_id=get_jwt_identity())
    return jsonify({"message": "Category deleted successfully"}), 200


@v1_bp.route("/sites/<site_id>/categories/<category_id>/duplicate", methods=["POST"])
@jwt_required()
@site_access_required
def duplicate_category_route(site_id, category_id):
    category = duplicate_category(site_id=site_id, category_id=category_id, actor_id=get_jwt_identity())
    return jsonify(normalize_category(category)), 201


# ------------------------
# Article categories
# ------------------------

@v1_bp.route("/sites/<site_id>/article-categories", methods=["GET"])
@jwt_required()
@site_access_required
def list_article_categories(site_id):
    return _list(ArticleCategory, site_id)


@v1_bp.route("/sites/<site_id>/article-categories", methods=["POST"])
@jwt_required()
@site_access_required
def create_article_category_route(site_id):
    category = create_category(
        site_id=site_id,
        data=request.get_json(silent=True) or {},
        model=ArticleCategory,
        actor_id=get_jwt_identity(),
    )
    return jsonify(normalize_category(category)), 201


@v1_bp.route("/sites/<site_id>/article-categories/<category_id>", methods=["PUT", "PATCH"])
@jwt_required()
@site_access_required
def update_article_category_route(site_id, category_id):
    category = update_category(
        site_id=site_id,
        category_id=category_id,
        data=request.get_json(silent=True) or {},
        model=ArticleCategory,
        actor_id=get_jwt_identity(),
    )
    return jsonify(normalize_category(category))


@v1_bp.route("/sites/<site_id>/article-categories/<category_id>", methods=["DELETE"])
@jwt_required()
@site_access_required
def delete_article_category_route(site_id, category_id):
    delete_category(
        site_id=site_id,
        category_id=category_id,
        model=ArticleCategory,
        actor_id=get_jwt_identity(),
    )
    return jsonify({"message": "Article category deleted successfully"}), 200
