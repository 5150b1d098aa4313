import os
import uuid
from typing import Iterable, Optional
from urllib.parse import urlparse

from flask import current_app, has_request_context, request
from werkzeug.datastructures import FileStorage
from werkzeug.exceptions import BadRequest, RequestEntityTooLarge
from werkzeug.utils import secure_filename

UPLOAD_SUBDIRS = ("products", "blog", "about-sections", "page-content")

# MIME type -> extensions a file of that type may carry
ALLOWED_IMAGE_TYPES = {
    "image/jpeg": {"jpg", "jpeg"},
    "image/jpg": {"jpg", "jpeg"},
    "image/png": {"png"},
    "image/webp": {"webp"},
}
DEFAULT_MAX_UPLOAD_SIZE = 5 * 1024 * 1024


def _extension(filename: str) -> str:
    return filename.rsplit(".", 1)[1].lower() if "." in filename else ""


def _subdir_path(subdir: str) -> str:
    if subdir not in UPLOAD_SUBDIRS:
        raise ValueError(f"Unknown upload directory: {subdir}")
    return os.path.join(current_app.config["UPLOAD_FOLDER"], subdir)


def _file_size(file: FileStorage) -> int:
    stream = file.stream
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size


def ensure_upload_dir(subdir: str) -> str:
    path = _subdir_path(subdir)
    os.makedirs(path, exist_ok=True)
    return path


def accept_image(file: Optional[FileStorage]) -> FileStorage:
    """
    Reject anything that is not a JPEG, PNG or WebP image of at most 5MB.

    Called at the request boundary, before any service runs.
    """
    if file is None or not file.filename:
        raise BadRequest("Image file is required")

    allowed_extensions = ALLOWED_IMAGE_TYPES.get(file.mimetype)
    if allowed_extensions is None:
        raise BadRequest(
            f"Invalid file type {file.mimetype or 'unknown'}. "
            "Only JPEG, PNG and WebP images are allowed"
        )

    if _extension(file.filename) not in allowed_extensions:
        raise BadRequest("File extension does not match its content type")

    limit = current_app.config.get("MAX_UPLOAD_SIZE", DEFAULT_MAX_UPLOAD_SIZE)
    if _file_size(file) > limit:
        raise RequestEntityTooLarge(
            f"File {file.filename} exceeds the {limit // (1024 * 1024)}MB limit"
        )

    return file


def accept_images(files: Iterable[FileStorage], *, max_count: int = 5, required: bool = True) -> list[FileStorage]:
    files = [f for f in files if f and f.filename]

    if required and not files:
        raise BadRequest("At least one image is required")
    if len(files) > max_count:
        raise BadRequest(f"A maximum of {max_count} images can be uploaded at once")

    return [accept_image(f) for f in files]


def save_file(file: FileStorage, subdir: str) -> str:
    """Store an accepted upload under a random name; returns the stored filename."""
    ext = _extension(secure_filename(file.filename))
    filename = f"{uuid.uuid4().hex}.{ext}" if ext else uuid.uuid4().hex

    file.save(os.path.join(ensure_upload_dir(subdir), filename))
    current_app.logger.info("Stored upload %s/%s", subdir, filename)
    return filename


def get_file_url(filename: str, subdir: str) -> str:
    base = current_app.config.get("PUBLIC_BASE_URL")
    if not base and has_request_context():
        base = request.host_url
    base = (base or "").rstrip("/")
    return f"{base}/uploads/{subdir}/{filename}"


def extract_filename(url: Optional[str], subdir: str) -> Optional[str]:
    """
    Filename of an upload we stored, or None for foreign URLs
    (seed data, external CDNs).
    """
    if not url:
        return None

    path = urlparse(url).path
    marker = f"/uploads/{subdir}/"
    if marker not in path:
        return None

    filename = os.path.basename(path)
    return filename or None


def delete_file(filename: str, subdir: str) -> bool:
    if not filename:
        return False

    path = os.path.join(_subdir_path(subdir), os.path.basename(filename))

    if not os.path.exists(path):
        current_app.logger.warning("Upload %s/%s not found, nothing to delete", subdir, filename)
        return False

    try:
        os.remove(path)
    except OSError as e:
        current_app.logger.error(f"Failed to delete file {path}: {e}")
        return False

    current_app.logger.info("Deleted upload %s/%s", subdir, filename)
    return True


def delete_files(filenames: Iterable[Optional[str]], subdir: str) -> int:
    """Best-effort removal; returns how many files were actually deleted."""
    deleted = 0
    for filename in filenames:
        if filename and delete_file(filename, subdir):
            deleted += 1
    return deleted


def delete_file_urls(urls: Iterable[Optional[str]], subdir: str) -> int:
    return delete_files((extract_filename(url, subdir) for url in urls), subdir)
