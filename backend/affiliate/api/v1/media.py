from flask import jsonify, request
from flask_jwt_extended import get_jwt_identity, jwt_required
from affiliate.application.admin.media import delete_media, upload_media
from affiliate.models import Media
from affiliate.normalizers.media import normalize_media
from affiliate.normalizers.pagination import normalize_pagination
from affiliate.utils.decorators import site_access_required
from . import v1_bp


@v1_bp.route("/sites/<site_id>/media", methods=["GET"])
@jwt_required()
@site_access_required
def list_media(site_id):
    page_num = request.args.get("page", 1, type=int)
    per_page = min(request.args.get("per_page", 24, type=int), 100)

    query = Media.query.filter_by(site_id=site_id)
    mime_prefix = request.args.get("type")  # e.g. "image"
    if mime_prefix:
        query = query.filter(Media.mime_type.like(f"{mime_prefix}/%"))

    pagination = query.order_by(Media.created_at.desc()).paginate(
        page=page_num, per_page=per_page, error_out=False
    )
    return jsonify(normalize_pagination(pagination, normalize_media))


@v1_bp.route("/sites/<site_id>/media", methods=["POST"])
@jwt_required()
@site_access_required
def upload_media_route(site_id):
    files = request.files.getlist("files") or request.files.getlist("file")
    if not files:
        return jsonify({"error": "No files provided"}), 400

    uploaded = [
        upload_media(
            site_id=site_id,
            file=file,
            alt_text=request.form.get("alt_text"),
            actor_id=get_jwt_identity(),
        )
        for file in files
    ]
    return jsonify({"items": [normalize_media(m) for m in uploaded]}), 201


@v1_bp.route("/sites/<site_id>/media/<media_id>", methods=["DELETE"])
@jwt_required()
@site_access_required
def delete_media_route(site_id, media_id):
    delete_media(site_id=site_id, media_id=media_id, actor_id=get_jwt_identity())
    return jsonify({"message": "Media deleted successfully"}), 200
