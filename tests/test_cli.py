"""Tests for the extract_palette command line."""

import numpy as np
import pytest
from PIL import Image

import extract_palette


def write_image(path, seed: int = 0, size: int = 16) -> None:
    rng = np.random.default_rng(seed)
    arr = rng.integers(0, 240, size=(size, size, 3), dtype=np.uint8)
    Image.fromarray(arr).save(path)


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self, tmp_path) -> None:
        """Test defaults mirror the sampling constants."""
        args = extract_palette.parse_cli_args([str(tmp_path)])
        assert args.count == 10
        assert args.quality == 10
        assert args.min_alpha == 125
        assert args.max_white == 250
        assert not args.remap and not args.swatch

    def test_options_from_args(self, tmp_path) -> None:
        """Test --max-white applies to all three channels."""
        args = extract_palette.parse_cli_args(
            [str(tmp_path), "--quality", "2", "--max-white", "200"]
        )
        opts = extract_palette.options_from_args(args)
        assert opts.quality == 2
        assert (opts.max_red, opts.max_green, opts.max_blue) == (200, 200, 200)


class TestMain:
    """Tests for main()."""

    def test_single_file(self, tmp_path, capsys) -> None:
        """Test a file run prints the palette and writes outputs."""
        src = tmp_path / "photo.png"
        write_image(src)
        extract_palette.main(
            [str(src), "--count", "4", "--quality", "1", "--remap", "--swatch"]
        )
        out = capsys.readouterr().out
        assert "Palette (" in out
        assert "share=" in out
        assert (tmp_path / "photo_palette.png").exists()
        assert (tmp_path / "photo_swatch.png").exists()
        with Image.open(tmp_path / "photo_palette.png") as im:
            assert im.size == (16, 16)
            colours = {c for _n, c in im.convert("RGB").getcolors(maxcolors=256)}
        assert len(colours) <= 4

    def test_folder_skips_outputs(self, tmp_path, capsys) -> None:
        """Test folder runs process images in order and skip artifacts."""
        write_image(tmp_path / "b.png", seed=1)
        write_image(tmp_path / "a.png", seed=2)
        write_image(tmp_path / "a_palette.png", seed=3)
        (tmp_path / "notes.txt").write_text("x")
        outdir = tmp_path / "out"
        extract_palette.main(
            [str(tmp_path), "--jobs", "1", "--quality", "1", "--swatch", "--outdir", str(outdir)]
        )
        out = capsys.readouterr().out
        assert out.index("=== a.png ===") < out.index("=== b.png ===")
        assert "a_palette.png ===" not in out
        assert sorted(p.name for p in outdir.iterdir()) == ["a_swatch.png", "b_swatch.png"]

    @pytest.mark.parametrize("jobs", ["1", "2"])
    def test_folder_skips_corrupt_image(self, tmp_path, capsys, jobs) -> None:
        """Test an unreadable image does not stop the folder run."""
        (tmp_path / "a_bad.png").write_bytes(b"not an image")
        write_image(tmp_path / "b_good.png", seed=4)
        extract_palette.main([str(tmp_path), "--jobs", jobs, "--quality", "1"])
        out = capsys.readouterr().out
        assert "[warn] skipping unreadable image: a_bad.png" in out
        assert "=== a_bad.png ===" not in out
        assert "=== b_good.png ===" in out
        assert "Palette (" in out

    def test_corrupt_file_reports_error(self, tmp_path, capsys) -> None:
        """Test an unreadable single file reports an error and returns."""
        src = tmp_path / "broken.png"
        src.write_bytes(b"\x89PNG garbage")
        extract_palette.main([str(src)])
        captured = capsys.readouterr()
        assert "[error] broken.png" in captured.err
        assert "Palette (" not in captured.out

    def test_filtered_image_reports_error(self, tmp_path, capsys) -> None:
        """Test an all-white image reports an error and does not crash."""
        src = tmp_path / "white.png"
        Image.new("RGB", (4, 4), (255, 255, 255)).save(src)
        extract_palette.main([str(src), "--quality", "1"])
        captured = capsys.readouterr()
        assert "[error] white.png" in captured.err

    def test_missing_input(self, tmp_path, capsys) -> None:
        """Test a missing path exits with status 2."""
        with pytest.raises(SystemExit) as exc:
            extract_palette.main([str(tmp_path / "nope.png")])
        assert exc.value.code == 2
        assert "not found" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "flags", [["--count", "1"], ["--quality", "0"], ["--jobs", "0"]]
    )
    def test_invalid_options(self, tmp_path, flags) -> None:
        """Test invalid options exit with status 2."""
        src = tmp_path / "x.png"
        write_image(src)
        with pytest.raises(SystemExit) as exc:
            extract_palette.main([str(src)] + flags)
        assert exc.value.code == 2
