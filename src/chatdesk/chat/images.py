"""Image payload helpers.

Hidden design decisions:
- Images travel through the store as data URLs
- The model receives the bare base64 payload plus its MIME type
"""

import base64
from pathlib import Path

from .constants import ALLOWED_IMAGE_TYPES, DEFAULT_IMAGE_MIME


def encode_image_file(path: str | Path) -> str:
    """Read an image file and return it as a data URL.

    Args:
        path: Path to a png, jpeg or webp file

    Returns:
        String of the form ``data:<mime>;base64,<payload>``

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file extension is not an accepted image type
    """
    image_path = Path(path).expanduser()
    mime_type = ALLOWED_IMAGE_TYPES.get(image_path.suffix.lower())
    if mime_type is None:
        accepted = ", ".join(sorted(ALLOWED_IMAGE_TYPES))
        raise ValueError(f"Unsupported image type '{image_path.suffix}'. Accepted: {accepted}")
    if not image_path.is_file():
        raise FileNotFoundError(f"Image not found: {image_path}")

    payload = base64.b64encode(image_path.read_bytes()).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def split_data_url(value: str) -> tuple[str, str]:
    """Split a data URL into (mime_type, base64_payload).

    A bare base64 string without a prefix is returned as-is with the
    default MIME type.
    """
    if not value.startswith("data:") or "," not in value:
        return DEFAULT_IMAGE_MIME, value

    header, payload = value.split(",", 1)
    mime_type = header[len("data:"):].split(";", 1)[0] or DEFAULT_IMAGE_MIME
    return mime_type, payload


def payload_size(value: str) -> int:
    """Approximate decoded size in bytes of a data URL or base64 string."""
    _, payload = split_data_url(value)
    padding = payload.count("=", max(len(payload) - 2, 0))
    return max(len(payload) * 3 // 4 - padding, 0)
