import os

import pytest
from PIL import Image

from tests.images import make_animated_gif, make_image
from webpcon import gif_pipeline
from webpcon.exceptions import FramePipelineError
from webpcon.gif_pipeline import (
    assemble_animation,
    cleanup_cache,
    compress_frames,
    convert_animated_gif,
    count_frames,
    extract_frames,
)


@pytest.fixture
def cache_dir(tmp_path):
    return str(tmp_path / ".webpcon_cache")


def test_count_frames(tmp_path):
    assert count_frames(str(make_animated_gif(tmp_path / "anim.gif", frame_count=4))) == 4
    assert count_frames(str(make_image(tmp_path / "still.gif", "GIF"))) == 1


def test_extract_frames_writes_numbered_pngs(tmp_path, cache_dir):
    gif = make_animated_gif(tmp_path / "anim.gif", frame_count=3, duration=120, loop=0)

    frame_set = extract_frames(str(gif), cache_dir)

    assert len(frame_set) == 3
    assert sorted(os.listdir(cache_dir)) == ["frame_00.png", "frame_01.png", "frame_02.png"]
    assert [frame.delay for frame in frame_set.frames] == [12, 12, 12]
    assert [frame.duration_ms for frame in frame_set.frames] == [120, 120, 120]
    assert frame_set.loop == 0
    assert frame_set.background == (255, 255, 255, 255)
    with Image.open(frame_set.frames[1].png_path) as img:
        assert img.mode == "RGBA"
        assert img.size == (16, 16)
        assert img.getpixel((8, 8)) == (0, 255, 0, 255)


def test_gif_without_loop_block_plays_once(tmp_path, cache_dir):
    gif = tmp_path / "once.gif"
    frames = [Image.new("RGB", (8, 8), color) for color in ((255, 0, 0), (0, 0, 255))]
    frames[0].save(gif, "GIF", save_all=True, append_images=frames[1:], duration=50)

    assert extract_frames(str(gif), cache_dir).loop == 1


def test_pipeline_produces_one_png_and_one_webp_per_frame(tmp_path, cache_dir):
    gif = make_animated_gif(tmp_path / "anim.gif", frame_count=4)

    frame_set = compress_frames(extract_frames(str(gif), cache_dir), cache_dir)

    names = sorted(os.listdir(cache_dir))
    assert [n for n in names if n.endswith(".png")] == [f"frame_0{i}.png" for i in range(4)]
    assert [n for n in names if n.endswith(".webp")] == [f"frame_0{i}.webp" for i in range(4)]
    assert all(frame.webp_path for frame in frame_set.frames)


def test_assemble_animation_keeps_frames_and_timing(tmp_path, cache_dir):
    gif = make_animated_gif(tmp_path / "anim.gif", frame_count=3, duration=100, loop=0)
    frame_set = compress_frames(extract_frames(str(gif), cache_dir), cache_dir)
    output = tmp_path / "anim.webp"

    assemble_animation(frame_set, str(output))

    with Image.open(output) as img:
        assert img.format == "WEBP"
        assert img.n_frames == 3
        assert img.info["loop"] == 0
        img.seek(1)
        img.load()
        assert img.info["duration"] == 100


def test_assemble_without_compressed_frames_fails(tmp_path, cache_dir):
    gif = make_animated_gif(tmp_path / "anim.gif", frame_count=2)
    frame_set = extract_frames(str(gif), cache_dir)

    with pytest.raises(FramePipelineError):
        assemble_animation(frame_set, str(tmp_path / "anim.webp"))


def test_convert_animated_gif_removes_cache_on_success(tmp_path, cache_dir):
    gif = make_animated_gif(tmp_path / "anim.gif", frame_count=3)
    output = tmp_path / "anim.webp"

    frame_set = convert_animated_gif(str(gif), str(output), cache_dir)

    assert len(frame_set) == 3
    assert output.exists()
    assert not os.path.exists(cache_dir)


def test_failed_step_leaves_cache_behind(tmp_path, cache_dir, monkeypatch):
    gif = make_animated_gif(tmp_path / "anim.gif", frame_count=3)

    def broken_assembly(frame_set, output_path):
        raise FramePipelineError(output_path, "boom")

    monkeypatch.setattr(gif_pipeline, "assemble_animation", broken_assembly)

    with pytest.raises(FramePipelineError):
        convert_animated_gif(str(gif), str(tmp_path / "anim.webp"), cache_dir)

    assert len(os.listdir(cache_dir)) == 6
    assert not (tmp_path / "anim.webp").exists()


def test_missing_frame_png_fails_compression(tmp_path, cache_dir):
    gif = make_animated_gif(tmp_path / "anim.gif", frame_count=2)
    frame_set = extract_frames(str(gif), cache_dir)
    os.remove(frame_set.frames[1].png_path)

    with pytest.raises(FramePipelineError):
        compress_frames(frame_set, cache_dir)


def test_extracting_a_non_gif_fails(tmp_path, cache_dir):
    png = make_image(tmp_path / "fake.gif", "PNG")

    with pytest.raises(FramePipelineError):
        extract_frames(str(png), cache_dir)


def test_cleanup_of_missing_cache_is_quiet(tmp_path):
    cleanup_cache(str(tmp_path / "never-created"))
