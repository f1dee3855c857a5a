from flask import jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from affiliate.application.admin.common import get_for_site
from affiliate.application.admin.products import (
    create_product,
    delete_product,
    duplicate_product,
    update_product,
)
from affiliate.models import Product, ProductCategory
from affiliate.normalizers.pagination import normalize_pagination
from affiliate.normalizers.product import normalize_product
from affiliate.utils.decorators import site_access_required
from . import v1_bp


@v1_bp.route("/sites/<site_id>/products", methods=["GET"])
@jwt_required()
@site_access_required
def list_products(site_id):
    status = request.args.get("status")  # DRAFT | PUBLISHED | ARCHIVED | None
    product_type = request.args.get("product_type")
    category_id = request.args.get("category_id")
    search = (request.args.get("q") or "").strip()
    page_num = request.args.get("page", 1, type=int)
    per_page = min(request.args.get("per_page", 20, type=int), 100)

    query = Product.query.filter_by(site_id=site_id)
    if status:
        query = query.filter_by(status=status)
    if product_type:
        query = query.filter_by(product_type=product_type)
    if category_id:
        query = query.join(ProductCategory).filter(ProductCategory.category_id == category_id)
    if search:
        query = query.filter(Product.title.ilike(f"%{search}%"))

    pagination = query.order_by(Product.updated_at.desc()).paginate(
        page=page_num, per_page=per_page, error_out=False
    )

    return jsonify(
        normalize_pagination(
            pagination,
            lambda p: normalize_product(p, include_content=False)
        )
    )


@v1_bp.route("/sites/<site_id>/products", methods=["POST"])
@jwt_required()
@site_access_required
def create_product_route(site_id):
    product = create_product(
        site_id=site_id,
        data=request.get_json(silent=True) or {},
        actor_id=get_jwt_identity(),
    )
    return jsonify(normalize_product(product)), 201


@v1_bp.route("/sites/<site_id>/products/<product_id>", methods=["GET"])
@jwt_required()
@site_access_required
def get_product(site_id, product_id):
    product = get_for_site(Product, site_id=site_id, entity_id=product_id, label="Product")
    return jsonify(normalize_product(product))


@v1_bp.route("/sites/<site_id>/products/<product_id>", methods=["PUT", "PATCH"])
@jwt_required()
@site_access_required
def update_product_route(site_id, product_id):
    product = update_product(
        site_id=site_id,
        product_id=product_id,
        data=request.get_json(silent=True) or {},
        actor_id=get_jwt_identity(),
    )
    return jsonify(normalize_product(product))


@v1_bp.route("/sites/<site_id>/products/<product_id>", methods=["DELETE"])
@jwt_required()
@site_access_required
def delete_product_route(site_id, product_id):
    delete_product(site_id=site_id, product_id=product_id, actor_id=get_jwt_identity())
    return jsonify({"message": "Product deleted successfully"}), 200


@v1_bp.route("/sites/<site_id>/products/<product_id>/duplicate", methods=["POST"])
@jwt_required()
@site_access_required
def duplicate_product_route(site_id, product_id):
    product = duplicate_product(site_id=site_id, product_id=product_id, actor_id=get_jwt_identity())
    return jsonify(normalize_product(product)), 201
