# storefront/core/storage_utils.py
import random
import re
import time
from datetime import datetime, timezone
from pathlib import Path

# Public URL prefix under which uploaded files are served.
PUBLIC_PREFIX = "/images"

# Names produced by generate_filename(): "<ms timestamp>-<random>.<ext>"
UPLOAD_NAME_RE = re.compile(r"^\d+-\d+\.[a-z0-9]+$", re.IGNORECASE)


def upload_root(upload_dir: str | Path) -> Path:
    """Resolve the upload directory, creating it if needed."""
    root = Path(upload_dir).resolve()
    root.mkdir(parents=True, exist_ok=True)
    return root


def generate_filename(ext: str) -> str:
    """
    Generate a collision-resistant filename.

    Args:
        ext: File extension without dot (e.g. "png", "jpg")

    Returns:
        A filename like "1718000000000-123456789.png"
    """
    millis = int(time.time() * 1000)
    return f"{millis}-{random.randint(0, 999_999_999)}.{ext}"


def save_upload(
    upload_dir: str | Path,
    file_bytes: bytes,
    ext: str,
    public_prefix: str = PUBLIC_PREFIX,
) -> str:
    """
    Write raw bytes to the upload directory under a fresh name.

    Returns:
        The public URL path, e.g. "/images/<filename>".
    """
    root = upload_root(upload_dir)
    filename = generate_filename(ext)
    (root / filename).write_bytes(file_bytes)
    return f"{public_prefix}/{filename}"


def resolve_upload(upload_dir: str | Path, filename: str) -> Path | None:
    """
    Map a client-supplied filename to a path inside the upload directory.

    Returns None for names that do not look like generated names or that
    would escape the directory.
    """
    if not UPLOAD_NAME_RE.match(filename):
        return None
    root = upload_root(upload_dir)
    target = (root / filename).resolve()
    if target.parent != root:
        return None
    return target


def list_uploads(upload_dir: str | Path, public_prefix: str = PUBLIC_PREFIX) -> list[dict]:
    """
    Describe every stored upload, newest first. Subdirectories are skipped.
    """
    root = upload_root(upload_dir)
    files: list[dict] = []
    for path in root.iterdir():
        if not path.is_file():
            continue
        stat = path.stat()
        files.append(
            {
                "filename": path.name,
                "url": f"{public_prefix}/{path.name}",
                "size": stat.st_size,
                "created_at": datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
            }
        )
    files.sort(key=lambda f: f["created_at"], reverse=True)
    return files
