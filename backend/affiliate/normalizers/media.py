from ._dates import iso


def normalize_media(media):
    return {
        "id": media.id,
        "site_id": media.site_id,
        "filename": media.filename,
        "url": media.url,
        "mime_type": media.mime_type,
        "size": media.size,
        "alt_text": media.alt_text,
        "uploaded_by": media.uploaded_by,
        "created_at": iso(media.created_at),
    }
