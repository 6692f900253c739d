"""Image processing for uploaded pictures.

Uploads are normalised to progressive JPEG: the full picture is scaled down to fit a
square bounding box and the thumbnail is cropped to fill a smaller square.
"""

import io
from dataclasses import dataclass

from PIL import Image, ImageOps, UnidentifiedImageError

from recipe_manager.core.logging import get_logger
from recipe_manager.exceptions.custom_exceptions import ValidationFailedError

_log = get_logger(__name__)

PICTURE_QUALITY = 90
THUMBNAIL_QUALITY = 85

INVALID_IMAGE = "invalidImage"


@dataclass(frozen=True)
class ProcessedImage:
    data: bytes
    thumbnail: bytes


def _to_jpeg(image: Image.Image, quality: int) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=quality, progressive=True, optimize=True)
    return buffer.getvalue()


def process_picture(
    raw: bytes,
    dimension: int,
    thumbnail_dimension: int,
) -> ProcessedImage:
    """Produce the stored picture and thumbnail from an uploaded file.

    The picture keeps its aspect ratio and is shrunk (never enlarged) to fit inside
    ``dimension`` x ``dimension``. The thumbnail is centre-cropped to exactly
    ``thumbnail_dimension`` x ``thumbnail_dimension``. EXIF orientation is applied
    first so phone photos come out upright.

    Args:
        raw: Bytes of the uploaded file.
        dimension: Bounding box edge of the stored picture, in pixels.
        thumbnail_dimension: Edge of the square thumbnail, in pixels.

    Returns:
        ProcessedImage: JPEG bytes of the picture and of its thumbnail.

    Raises:
        ValidationFailedError: If the upload is not a readable image.
    """
    try:
        with Image.open(io.BytesIO(raw)) as opened:
            image = ImageOps.exif_transpose(opened)
            image.load()
    except (UnidentifiedImageError, OSError) as e:
        _log.warning("Rejected unreadable image upload: {}", str(e))
        raise ValidationFailedError(fields={"file": INVALID_IMAGE}) from e

    if image.mode != "RGB":
        image = image.convert("RGB")

    picture = image.copy()
    picture.thumbnail((dimension, dimension), Image.Resampling.LANCZOS)
    thumbnail = ImageOps.fit(
        image,
        (thumbnail_dimension, thumbnail_dimension),
        Image.Resampling.LANCZOS,
    )
    return ProcessedImage(
        data=_to_jpeg(picture, PICTURE_QUALITY),
        thumbnail=_to_jpeg(thumbnail, THUMBNAIL_QUALITY),
    )
