import os
import logging

from PIL import Image

from .config import DECODER_FORMATS, STATIC_QUALITY
from .exceptions import ImageDecodeError, ImageEncodeError

logger = logging.getLogger(__name__)


def webp_path_for(path: str) -> str:
    """Sibling path with the extension replaced by .webp"""
    return os.path.splitext(path)[0] + ".webp"


def normalize_mode(img: Image.Image) -> Image.Image:
    """Bring palette, greyscale and CMYK images into a mode WebP can encode"""
    if img.mode in ("P", "PA", "LA") or (img.mode == "L" and "transparency" in img.info):
        return img.convert("RGBA")
    if img.mode not in ("RGB", "RGBA"):
        return img.convert("RGB")
    return img


def decode_image(source_path: str, ext: str) -> Image.Image:
    """
    Decode a single frame with the decoder matching the extension
    
    For GIF only the first frame is returned.
    
    Args:
        source_path: File to decode
        ext: Lower-cased extension of the original file
        
    Returns:
        Image.Image: Decoded image, fully loaded into memory
    """
    fmt = DECODER_FORMATS.get(ext)
    if fmt is None:
        raise ValueError(f"Unsupported image extension: {ext}")

    try:
        with Image.open(source_path, formats=[fmt]) as img:
            img.load()
            return normalize_mode(img).copy()
    except Exception as e:
        logger.error(f"❌ Error decoding image {source_path}: {str(e)}")
        raise ImageDecodeError(source_path, f"cannot decode as {fmt} ({e})") from e


def encode_webp(img: Image.Image, output_path: str, quality: int = STATIC_QUALITY):
    try:
        img.save(output_path, "WEBP", quality=quality)
    except Exception as e:
        logger.error(f"❌ Error encoding WebP {output_path}: {str(e)}")
        raise ImageEncodeError(output_path, f"cannot encode WebP ({e})") from e


def convert_static(source_path: str, ext: str, output_path: str, quality: int = STATIC_QUALITY) -> str:
    """
    Convert one image (or the first frame of a GIF) to a static WebP
    
    Args:
        source_path: Backed-up original to read from
        ext: Extension of the original, used to pick the decoder
        output_path: Where the WebP is written
        quality: WebP quality, 0-100
        
    Returns:
        str: The written WebP path
    """
    img = decode_image(source_path, ext)
    encode_webp(img, output_path, quality)
    return output_path
