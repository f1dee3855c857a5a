from flask import jsonify, request
from flask_jwt_extended import get_jwt, get_jwt_identity, jwt_required
from affiliate.application.admin.sites import create_site, delete_site, get_site, update_site
from affiliate.models import Niche, Site
from affiliate.normalizers.site import normalize_niche, normalize_site
from affiliate.utils.decorators import admin_required, site_access_required
from . import v1_bp


# ------------------------
# Sites
# ------------------------

@v1_bp.route("/sites", methods=["GET"])
@jwt_required()
def list_sites():
    """Landing route: every site for admins, assigned sites for owners."""
    claims = get_jwt()
    query = Site.query
    if claims.get("role") != "ADMIN":
        query = query.filter(Site.id.in_(claims.get("site_ids") or []))

    sites = query.order_by(Site.name.asc()).all()
    return jsonify({"items": [normalize_site(site) for site in sites]}), 200


@v1_bp.route("/sites", methods=["POST"])
@jwt_required()
@admin_required
def create_site_route():
    site = create_site(data=request.get_json(silent=True) or {}, actor_id=get_jwt_identity())
    return jsonify(normalize_site(site)), 201


@v1_bp.route("/sites/<site_id>", methods=["GET"])
@jwt_required()
@site_access_required
def get_site_route(site_id):
    return jsonify(normalize_site(get_site(site_id))), 200


@v1_bp.route("/sites/<site_id>", methods=["PUT", "PATCH"])
@jwt_required()
@site_access_required
def update_site_route(site_id):
    site = update_site(site_id=site_id, data=request.get_json(silent=True) or {}, actor_id=get_jwt_identity())
    return jsonify(normalize_site(site)), 200


@v1_bp.route("/sites/<site_id>", methods=["DELETE"])
@jwt_required()
@admin_required
def delete_site_route(site_id):
    delete_site(site_id=site_id, actor_id=get_jwt_identity())
    return jsonify({"message": "Site deleted successfully"}), 200


# ------------------------
# Niches (read only)
# ------------------------

@v1_bp.route("/niches", methods=["GET"])
@jwt_required()
def list_niches():
    niches = Niche.query.order_by(Niche.name.asc()).all()
    return jsonify({"items": [normalize_niche(niche) for niche in niches]}), 200


@v1_bp.route("/niches/<niche_id>", methods=["GET"])
@jwt_required()
def get_niche(niche_id):
    niche = Niche.query.filter_by(id=niche_id).first_or_404()
    return jsonify(normalize_niche(niche)), 200
