"""
Animated GIF -> animated WebP, through a per-frame cache on disk

Frames are extracted as PNGs, recompressed one by one as WebP, then read
back and assembled into a single animated WebP. The cache directory is only
removed once assembly succeeded; a failing step leaves it behind.
"""

import os
import shutil
import logging
from dataclasses import dataclass, field
from typing import List, Tuple

from PIL import Image, ImageSequence

from .config import FRAME_QUALITY, DELAY_SCALE, BACKGROUND_SENTINEL
from .exceptions import FramePipelineError

logger = logging.getLogger(__name__)


@dataclass
class GifFrame:
    index: int
    png_path: str
    delay: int              # centiseconds, as stored in the GIF
    disposal: int
    webp_path: str = ""

    @property
    def duration_ms(self) -> int:
        return self.delay * DELAY_SCALE


@dataclass
class FrameSet:
    source_path: str
    size: Tuple[int, int]
    loop: int
    frames: List[GifFrame] = field(default_factory=list)
    background: Tuple[int, int, int, int] = BACKGROUND_SENTINEL

    def __len__(self) -> int:
        return len(self.frames)


def frame_filename(index: int, ext: str) -> str:
    return f"frame_{index:02d}{ext}"


def count_frames(gif_path: str) -> int:
    with Image.open(gif_path, formats=["GIF"]) as im:
        return getattr(im, "n_frames", 1)


def extract_frames(gif_path: str, cache_dir: str) -> FrameSet:
    """
    Decode every frame of a GIF and write each one as a numbered PNG

    Each frame is composited over a fresh transparent canvas. Pillow hands
    frames out at full canvas size, so their natural bounds are the whole
    canvas. Disposal methods are recorded for the encoder, not applied here.

    Args:
        gif_path: Backed-up GIF to read
        cache_dir: Scratch directory receiving frame_NN.png files

    Returns:
        FrameSet: Frames in order with their delays and disposal methods
    """
    os.makedirs(cache_dir, exist_ok=True)

    try:
        with Image.open(gif_path, formats=["GIF"]) as im:
            # Pillow omits "loop" when the GIF has no NETSCAPE block, i.e. plays once
            frame_set = FrameSet(source_path=gif_path, size=im.size, loop=im.info.get("loop", 1))

            for index, frame in enumerate(ImageSequence.Iterator(im)):
                # Pillow reports the delay already scaled to milliseconds
                delay = frame.info.get("duration", 0) // DELAY_SCALE
                disposal = getattr(frame, "disposal_method", 0)

                rgba = frame.convert("RGBA")
                canvas = Image.new("RGBA", frame_set.size, (0, 0, 0, 0))
                canvas.alpha_composite(rgba)

                png_path = os.path.join(cache_dir, frame_filename(index, ".png"))
                canvas.save(png_path, "PNG")
                frame_set.frames.append(GifFrame(index, png_path, delay, disposal))
    except Exception as e:
        logger.error(f"❌ Error extracting frames from {gif_path}: {str(e)}")
        raise FramePipelineError(gif_path, f"frame extraction failed ({e})") from e

    logger.info(f"🎞️ Extracted {len(frame_set)} frames from {os.path.basename(gif_path)}")
    return frame_set


def compress_frames(frame_set: FrameSet, cache_dir: str, quality: int = FRAME_QUALITY) -> FrameSet:
    """Re-encode every extracted PNG as frame_NN.webp next to it"""
    for frame in frame_set.frames:
        webp_path = os.path.join(cache_dir, frame_filename(frame.index, ".webp"))
        try:
            with Image.open(frame.png_path, formats=["PNG"]) as img:
                img.save(webp_path, "WEBP", quality=quality)
        except Exception as e:
            logger.error(f"❌ Error compressing frame {frame.png_path}: {str(e)}")
            raise FramePipelineError(frame.png_path, f"frame compression failed ({e})") from e
        frame.webp_path = webp_path

    return frame_set


def assemble_animation(frame_set: FrameSet, output_path: str, quality: int = FRAME_QUALITY) -> str:
    """
    Read the per-frame WebPs back and write a single animated WebP

    Args:
        frame_set: Frames whose webp_path has been filled by compress_frames
        output_path: Target animated WebP
        quality: WebP quality used for the animation

    Returns:
        str: The written WebP path
    """
    images = []
    try:
        for frame in frame_set.frames:
            if not frame.webp_path:
                raise ValueError(f"frame {frame.index} was not compressed")
            with Image.open(frame.webp_path, formats=["WEBP"]) as img:
                img.load()
                images.append(img.convert("RGBA"))

        if not images:
            raise ValueError("no frames to assemble")

        images[0].save(
            output_path,
            "WEBP",
            save_all=True,
            append_images=images[1:],
            duration=[frame.duration_ms for frame in frame_set.frames],
            disposal=[frame.disposal for frame in frame_set.frames],
            loop=frame_set.loop,
            background=frame_set.background,
            quality=quality,
        )
    except Exception as e:
        logger.error(f"❌ Error assembling animated WebP {output_path}: {str(e)}")
        raise FramePipelineError(output_path, f"animation assembly failed ({e})") from e

    return output_path


def cleanup_cache(cache_dir: str):
    """Best-effort removal of the frame cache"""
    try:
        shutil.rmtree(cache_dir)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"⚠️ Could not remove cache directory {cache_dir}: {str(e)}")


def convert_animated_gif(gif_path: str, output_path: str, cache_dir: str) -> FrameSet:
    """
    Run extraction, per-frame compression, assembly and cleanup in order

    A failure in any step raises FramePipelineError before cleanup runs,
    leaving the cache directory in place.
    """
    frame_set = extract_frames(gif_path, cache_dir)
    compress_frames(frame_set, cache_dir)
    assemble_animation(frame_set, output_path)
    cleanup_cache(cache_dir)
    logger.info(f"🎬 Assembled {len(frame_set)} frames into {os.path.basename(output_path)}")
    return frame_set
