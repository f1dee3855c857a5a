import os
import uuid

from flask import current_app
from werkzeug.utils import secure_filename

ALLOWED_EXTENSIONS = {
    "png", "jpg", "jpeg", "gif", "webp", "svg",
    "pdf", "doc", "docx",
}

UPLOAD_URL_PREFIX = "/uploads"


def allowed_file(filename):
    return "." in filename and filename.rsplit(".", 1)[1].lower() in ALLOWED_EXTENSIONS


def upload_root():
    folder = current_app.config.get("UPLOAD_FOLDER", "uploads")
    if not os.path.isabs(folder):
        folder = os.path.join(current_app.root_path, folder)
    return folder


def save_file(file, *, subdir):
    """Store an uploaded file under ``UPLOAD_FOLDER/subdir`` and return ``(url, size)``."""
    if not file or not file.filename or not allowed_file(file.filename):
        raise ValueError("File type not allowed")

    filename = secure_filename(file.filename)
    ext = filename.rsplit(".", 1)[1].lower()
    unique_filename = f"{uuid.uuid4().hex}.{ext}"

    directory = os.path.join(upload_root(), secure_filename(subdir))
    os.makedirs(directory, exist_ok=True)
    file_path = os.path.join(directory, unique_filename)

    file.save(file_path)

    return f"{UPLOAD_URL_PREFIX}/{secure_filename(subdir)}/{unique_filename}", os.path.getsize(file_path)


def delete_file(file_url):
    """
    Delete a stored upload given the URL ``save_file`` returned.
    Returns False when the file is already gone.
    """
    if not file_url or not file_url.startswith(UPLOAD_URL_PREFIX + "/"):
        return False

    relative = file_url[len(UPLOAD_URL_PREFIX) + 1:]
    file_path = os.path.join(upload_root(), *relative.split("/"))

    if not os.path.exists(file_path):
        return False

    try:
        os.remove(file_path)
    except OSError as e:
        current_app.logger.error(f"Failed to delete file {file_path}: {e}")
        return False
    return True
