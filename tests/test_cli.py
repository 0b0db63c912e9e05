"""
Tests for the command-line front end.
"""

import io
import logging

import numpy as np
import pytest
from PIL import Image

from chromasplit.cli import Confirmer, main, parse_options, run
from chromasplit.config import OverwritePolicy
from chromasplit.core.data_types import ColorSpace


@pytest.fixture
def source(tmp_path):
    rng = np.random.default_rng(5)
    path = tmp_path / "photo.png"
    Image.fromarray(rng.integers(0, 256, size=(6, 8, 3), dtype=np.uint8)).save(path)
    return path


class TestParseOptions:
    def test_defaults(self, source):
        options, _ = parse_options([str(source)])

        assert options.files == [source]
        assert options.out_dir is None
        assert options.spaces == list(ColorSpace)
        assert options.policy is OverwritePolicy.SKIP
        assert options.quality.value == 90.0
        assert options.tinted
        assert options.include_source

    def test_spaces_merge(self, source):
        """Repeated -s flags are merged and ordered by declaration."""
        options, _ = parse_options([str(source), "-s", "lab", "-s", "HSL,lab"])
        assert options.spaces == [ColorSpace.HSL, ColorSpace.LAB]

    def test_flags(self, source):
        options, _ = parse_options([
            str(source), "-y", "--lossless", "--plain", "--no-source",
            "--resize", "40x30", "--crop", "20x10-1+2", "-j", "2",
        ])

        assert options.policy is OverwritePolicy.OVERWRITE
        assert options.quality.lossless
        assert not options.tinted
        assert not options.include_source
        assert (options.resize.width, options.resize.height) == (40, 30)
        assert str(options.crop) == "20x10-1+2"
        assert options.jobs == 2

    def test_interactive(self, source):
        options, _ = parse_options([str(source), "-i"])
        assert options.policy is OverwritePolicy.INTERACTIVE

    @pytest.mark.parametrize("argv", [
        ["-s", "ycbcr"],
        ["-q", "101"],
        ["--crop", "10X20"],
        ["-y", "-i"],
        ["-q", "50", "--lossless"],
    ])
    def test_rejected(self, source, argv):
        with pytest.raises(SystemExit):
            parse_options([str(source), *argv])


class TestConfirmer:
    @pytest.fixture
    def existing(self, tmp_path):
        path = tmp_path / "out.webp"
        path.write_bytes(b"")
        return path

    def test_new_file(self, tmp_path):
        assert Confirmer(OverwritePolicy.SKIP).confirm(tmp_path / "new.webp")

    def test_skip(self, existing, caplog):
        with caplog.at_level(logging.WARNING):
            assert not Confirmer(OverwritePolicy.SKIP).confirm(existing)
        assert "already exists" in caplog.text

    def test_overwrite(self, existing):
        assert Confirmer(OverwritePolicy.OVERWRITE).confirm(existing)

    def test_ask_repeats_until_answered(self, existing):
        stdout = io.StringIO()
        confirmer = Confirmer(OverwritePolicy.INTERACTIVE, io.StringIO("maybe\ny\n"), stdout)

        assert confirmer.confirm(existing)
        assert stdout.getvalue().count("overwrite? [y/N]") == 2

    @pytest.mark.parametrize("answer", ["\n", "n\n", "N\n"])
    def test_ask_declined(self, existing, answer):
        confirmer = Confirmer(OverwritePolicy.INTERACTIVE, io.StringIO(answer), io.StringIO())
        assert not confirmer.confirm(existing)

    def test_ask_end_of_input(self, existing):
        stdout = io.StringIO()
        confirmer = Confirmer(OverwritePolicy.INTERACTIVE, io.StringIO(""), stdout)

        assert not confirmer.confirm(existing)
        assert stdout.getvalue().endswith("N\n")


class TestMain:
    def test_writes_mosaics(self, source, tmp_path):
        out_dir = tmp_path / "out"
        status = main([str(source), "-o", str(out_dir), "-s", "hsl,cmyk", "--lossless", "-j", "2"])

        assert status == 0
        assert sorted(p.name for p in out_dir.iterdir()) == ["photo-cmyk.webp", "photo-hsl.webp"]
        with Image.open(out_dir / "photo-hsl.webp") as img:
            assert img.size == (8 * 4, 6)
        with Image.open(out_dir / "photo-cmyk.webp") as img:
            assert img.size == (8 * 5, 6)

    def test_source_tile(self, source, tmp_path):
        """The first tile of a lossless mosaic is the source image."""
        main([str(source), "-o", str(tmp_path), "-s", "lab", "--lossless"])

        with Image.open(tmp_path / "photo-lab.webp") as img:
            mosaic = np.asarray(img.convert("RGB"))
        with Image.open(source) as img:
            expected = np.asarray(img.convert("RGB"))
        np.testing.assert_array_equal(mosaic[:, :8], expected)

    def test_writes_next_to_source(self, source):
        assert main([str(source), "-s", "xyY", "--no-source"]) == 0

        with Image.open(source.parent / "photo-xyY.webp") as img:
            assert img.size == (8 * 3, 6)

    def test_existing_files_skipped(self, source, tmp_path):
        out = tmp_path / "photo-hsv.webp"
        out.write_bytes(b"keep")

        assert main([str(source), "-o", str(tmp_path), "-s", "hsv"]) == 0
        assert out.read_bytes() == b"keep"

    def test_existing_files_overwritten(self, source, tmp_path):
        out = tmp_path / "photo-hsv.webp"
        out.write_bytes(b"stale")

        assert main([str(source), "-o", str(tmp_path), "-s", "hsv", "-y"]) == 0
        with Image.open(out) as img:
            assert img.format == "WEBP"

    def test_missing_file(self, source, tmp_path):
        """A bad input fails the run without stopping the others."""
        missing = tmp_path / "missing.png"
        status = main([str(missing), str(source), "-o", str(tmp_path / "out"), "-s", "hwb"])

        assert status == 1
        assert (tmp_path / "out" / "photo-hwb.webp").exists()

    def test_mosaic_too_wide(self, source, tmp_path, caplog):
        """A mosaic past the WebP size limit fails that file only."""
        wide = tmp_path / "wide.png"
        Image.new("RGB", (3400, 2)).save(wide)
        out_dir = tmp_path / "out"

        with caplog.at_level(logging.ERROR):
            status = main([str(wide), str(source), "-o", str(out_dir), "-s", "cmyk"])

        assert status == 1
        assert (out_dir / "photo-cmyk.webp").exists()
        assert str(out_dir / "wide-cmyk.webp") in caplog.text

    def test_decompression_bomb(self, source, tmp_path, monkeypatch, caplog):
        small = tmp_path / "small.png"
        Image.new("RGB", (2, 2)).save(small)
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)
        out_dir = tmp_path / "out"

        with caplog.at_level(logging.ERROR):
            status = main([str(source), str(small), "-o", str(out_dir), "-s", "hsv"])

        assert status == 1
        assert (out_dir / "small-hsv.webp").exists()
        assert not (out_dir / "photo-hsv.webp").exists()
        assert f"{source}: " in caplog.text

    def test_verbose_logging(self, source, tmp_path):
        main([str(source), "-o", str(tmp_path), "-s", "rgb", "-v"])
        assert logging.getLogger("chromasplit").level == logging.DEBUG

        main([str(source), "-o", str(tmp_path), "-s", "rgb", "-y"])
        assert logging.getLogger("chromasplit").level == logging.INFO

    def test_run_with_confirmer(self, source, tmp_path):
        options, _ = parse_options([str(source), "-o", str(tmp_path), "-s", "luv", "-i"])
        (tmp_path / "photo-luv.webp").write_bytes(b"old")
        confirmer = Confirmer(options.policy, io.StringIO("y\n"), io.StringIO())

        assert run(options, confirmer) == 0
        assert (tmp_path / "photo-luv.webp").read_bytes() != b"old"
