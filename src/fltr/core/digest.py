"""Content digests and display helpers for loaded files."""

import hashlib


def compute_sha256(data: bytes) -> str:
    """Compute the lowercase hex SHA-256 of in-memory content."""
    return hashlib.sha256(data).hexdigest()


def truncate_hash(digest: str | None) -> str:
    """Shorten a digest to ``first4...last4`` for display."""
    if not digest or len(digest) < 8:
        return digest or "..."
    return f"{digest[:4]}...{digest[-4:]}"


def format_file_size(size: int) -> str:
    """Format a byte count as e.g. ``1.5 KB``."""
    if size <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    index = 0
    while size >= 1024 ** (index + 1) and index < len(units) - 1:
        index += 1
    value = round(size / 1024**index, 2)
    return f"{value:g} {units[index]}"
