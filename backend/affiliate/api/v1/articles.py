from flask import jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from affiliate.application.admin.articles import (
    create_article,
    delete_article,
    duplicate_article,
    update_article,
)
from affiliate.application.admin.common import get_for_site
from affiliate.models import Article
from affiliate.normalizers.article import normalize_article
from affiliate.normalizers.pagination import normalize_pagination
from affiliate.utils.decorators import site_access_required
from . import v1_bp


@v1_bp.route("/sites/<site_id>/articles", methods=["GET"])
@jwt_required()
@site_access_required
def list_articles(site_id):
    status = request.args.get("status")
    article_type = request.args.get("article_type")
    category_id = request.args.get("category_id")
    search = (request.args.get("q") or "").strip()
    page_num = request.args.get("page", 1, type=int)
    per_page = min(request.args.get("per_page", 20, type=int), 100)

    query = Article.query.filter_by(site_id=site_id)
    if status:
        query = query.filter_by(status=status)
    if article_type:
        query = query.filter_by(article_type=article_type)
    if category_id:
        query = query.filter_by(category_id=category_id)
    if search:
        query = query.filter(Article.title.ilike(f"%{search}%"))

    pagination = query.order_by(Article.updated_at.desc()).paginate(
        page=page_num, per_page=per_page, error_out=False
    )

    return jsonify(
        normalize_pagination(
            pagination,
            lambda a: normalize_article(a, include_content=False)
        )
    )


@v1_bp.route("/sites/<site_id>/articles", methods=["POST"])
@jwt_required()
@site_access_required
def create_article_route(site_id):
    article = create_article(
        site_id=site_id,
        data=request.get_json(silent=True) or {},
        actor_id=get_jwt_identity(),
    )
    return jsonify(normalize_article(article)), 201


@v1_bp.route("/sites/<site_id>/articles/<article_id>", methods=["GET"])
@jwt_required()
@site_access_required
def get_article(site_id, article_id):
    article = get_for_site(Article, site_id=site_id, entity_id=article_id, label="Article")
    return jsonify(normalize_article(article))


@v1_bp.route("/sites/<site_id>/articles/<article_id>", methods=["PUT", "PATCH"])
@jwt_required()
@site_access_required
def update_article_route(site_id, article_id):
    article = update_article(
        site_id=site_id,
        article_id=article_id,
        data=request.get_json(silent=True) or {},
        actor_id=get_jwt_identity(),
    )
    return jsonify(normalize_article(article))


@v1_bp.route("/sites/<site_id>/articles/<article_id>", methods=["DELETE"])
@jwt_required()
@site_access_required
def delete_article_route(site_id, article_id):
    delete_article(site_id=site_id, article_id=article_id, actor_id=get_jwt_identity())
    return jsonify({"message": "Article deleted successfully"}), 200


@v1_bp.route("/sites/<site_id>/articles/<article_id>/duplicate", methods=["POST"])
@jwt_required()
@site_access_required
def duplicate_article_route(site_id, article_id):
    article = duplicate_article(site_id=site_id, article_id=article_id, actor_id=get_jwt_identity())
    return jsonify(normalize_article(article)), 201
