import logging
from typing import Optional

from affiliate.extensions import db
from affiliate.models import Media, Site
from affiliate.domain.validation import ValidationError
from affiliate.utils.media import delete_file, save_file
from affiliate.utils.transaction import transactional
from .common import get_for_site

logger = logging.getLogger(__name__)


def upload_media(*, site_id: str, file, alt_text: Optional[str] = None, actor_id: Optional[str] = None) -> Media:
    site = db.session.get(Site, site_id)
    try:
        url, size = save_file(file, subdir=site.slug if site else site_id)
    except ValueError as exc:
        raise ValidationError({"file": str(exc)}) from exc

    media = Media(
        site_id=site_id,
        filename=file.filename,
        url=url,
        mime_type=file.mimetype,
        size=size,
        alt_text=alt_text,
        uploaded_by=actor_id,
    )
    try:
        with transactional():
            db.session.add(media)
    except Exception:
        delete_file(url)
        raise

    logger.info("media.upload id=%s site=%s actor=%s", media.id, site_id, actor_id)
    return media


def delete_media(*, site_id: str, media_id: str, actor_id: Optional[str] = None) -> None:
    media = get_for_site(Media, site_id=site_id, entity_id=media_id, label="Media")
    url = media.url
    with transactional():
        db.session.delete(media)
    if not delete_file(url):
        logger.warning("Media file %s was already missing", url)
    logger.info("media.delete id=%s site=%s actor=%s", media_id, site_id, actor_id)
