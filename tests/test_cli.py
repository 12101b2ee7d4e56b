"""
Tests for the fwextract command line.
"""

import pytest

from conftest import build_image
from fwextract.cli import create_parser, main
from fwextract.utils import format_address, format_size, parse_int


@pytest.fixture(autouse=True)
def isolated_config(temp_dir, monkeypatch):
    """Keep user and working-directory config files out of CLI runs."""
    monkeypatch.chdir(temp_dir)
    monkeypatch.setenv("HOME", str(temp_dir))
    for var in ("FWEXTRACT_LOG_LEVEL", "FWEXTRACT_LOG_FILE", "FWEXTRACT_ENABLED_TYPES"):
        monkeypatch.delenv(var, raising=False)


def run(argv):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


class TestParser:
    def test_address_parsing(self):
        args = create_parser().parse_args(
            ["info", "img.bin", "--type", "gc", "--address", "0x1000", "--base", "4096"]
        )
        assert args.address == 0x1000
        assert args.base == 4096
        assert args.address_size == 8
        assert args.endian == "little"

    def test_symbols_repeatable(self):
        args = create_parser().parse_args(
            ["extract", "img.bin", "-t", "gc", "-a", "0", "--symbol", "a=1", "--symbol", "b=2"]
        )
        assert args.symbol == ["a=1", "b=2"]


class TestCommands:
    def test_types(self, capsys):
        assert run(["types"]) == 0
        out = capsys.readouterr().out
        assert "GC" in out and "SDMA" in out and "Catalyst" in out

    def test_info(self, sample_image_file, capsys):
        code = run(["info", str(sample_image_file), "-t", "gc", "-a", "0x1000"])

        out = capsys.readouterr().out
        assert code == 0
        assert "data_1000" in out
        assert "0x1040" in out
        assert "Extractable" in out

    def test_info_out_of_range(self, temp_dir, capsys):
        image = temp_dir / "bad.bin"
        image.write_bytes(build_image(0x100, header_base=0, data_offset=0x80, data_size=0x1000))

        assert run(["info", str(image), "-t", "gc", "-a", "0"]) == 1
        assert "outside the image" in capsys.readouterr().out

    def test_extract_to_output(self, sample_image_file, temp_dir):
        output = temp_dir / "gc.bin"

        code = run(
            ["extract", str(sample_image_file), "-t", "gc", "-a", "0x1000", "-o", str(output)]
        )

        assert code == 0
        assert output.read_bytes() == b"\xde\xad\xbe\xef"

    def test_extract_default_name_from_symbol(self, sample_image_file, temp_dir):
        code = run(
            [
                "extract",
                str(sample_image_file),
                "-t",
                "gc",
                "-a",
                "0x1008",
                "--symbol",
                "_gfx_ce=0x1000:0x28",
                "--output-dir",
                str(temp_dir),
            ]
        )

        assert code == 0
        assert (temp_dir / "gfx_ce.bin").read_bytes() == b"\xde\xad\xbe\xef"

    def test_extract_rejected(self, sample_image_file, temp_dir):
        code = run(["extract", str(sample_image_file), "-t", "sdma", "-a", "0x1100"])

        assert code == 1
        assert not (temp_dir / "data_1100.bin").exists()

    def test_unknown_type(self, sample_image_file):
        assert run(["info", str(sample_image_file), "-t", "vcn", "-a", "0"]) == 2

    def test_missing_image(self, temp_dir):
        assert run(["info", str(temp_dir / "nope.bin"), "-t", "gc", "-a", "0"]) == 2

    def test_missing_config(self, temp_dir):
        assert run(["-c", str(temp_dir / "nope.yaml"), "types"]) == 2

    def test_debug_keeps_configured_log_file(self, temp_dir):
        log_file = temp_dir / "logs" / "fw.log"
        config_file = temp_dir / "fwextract.yaml"
        config_file.write_text(f"log_file: {log_file}\n")

        assert run(["-c", str(config_file), "--debug", "types"]) == 0
        assert log_file.exists()


class TestUtils:
    @pytest.mark.parametrize(
        "text,value", [("0x10", 16), ("16", 16), ("10h", 16), ("0x1_000", 0x1000)]
    )
    def test_parse_int(self, text, value):
        assert parse_int(text) == value

    def test_format_address(self):
        assert format_address(0x1a) == "0x1A"
        assert format_address(0x1a, width=4) == "0x0000001A"
        assert format_address(None) == "-"

    def test_format_size(self):
        assert format_size(4) == "4 B"
        assert format_size(2048) == "2.00 KB"
