"""Tests for the CLI module."""

from __future__ import annotations

from pathlib import Path

import pytest

from slimfilter.cli import main

FIXTURE_DIR = Path(__file__).parent / "fixtures"
SAMPLE_MD = FIXTURE_DIR / "sample.md"


class TestCLIMain:
    """Test the main() entry point."""

    def test_list_profiles(self, capsys):
        ret = main(["--list-profiles"])
        assert ret == 0
        out = capsys.readouterr().out
        assert "plain" in out
        assert "xhtml" in out

    def test_missing_input(self):
        with pytest.raises(SystemExit):
            main([])

    def test_invalid_wrapper(self):
        with pytest.raises(SystemExit):
            main(["x.md", "-w", "angle"])

    def test_file_not_found(self, capsys):
        ret = main(["nonexistent.md"])
        assert ret == 1
        err = capsys.readouterr().err
        assert "not found" in err

    def test_convert_sample(self, tmp_path, capsys):
        out = tmp_path / "output.slim"
        ret = main([str(SAMPLE_MD), "-o", str(out)])
        assert ret == 0
        assert out.read_text(encoding="utf-8").startswith("h1 Sample Document")

    def test_verbose_flag(self, tmp_path, capsys):
        out = tmp_path / "output.slim"
        ret = main([str(SAMPLE_MD), "-o", str(out), "-v"])
        assert ret == 0
        stdout = capsys.readouterr().out
        assert "Input:" in stdout
        assert "Wrapper:" in stdout
        assert "Done." in stdout

    def test_default_output_name(self, tmp_path, capsys):
        md_file = tmp_path / "myfile.md"
        md_file.write_text("# Test", encoding="utf-8")
        ret = main([str(md_file)])
        assert ret == 0
        expected = tmp_path / "myfile.slim"
        assert expected.read_text(encoding="utf-8") == "h1 Test\n"
        assert "Converted:" in capsys.readouterr().out

    def test_wrapper_and_cursor(self, tmp_path, capsys):
        md_file = tmp_path / "link.md"
        md_file.write_text("[x](/y)", encoding="utf-8")
        out = tmp_path / "link.slim"
        ret = main([str(md_file), "-o", str(out), "-w", "curly", "--cursor", "|"])
        assert ret == 0
        assert out.read_text(encoding="utf-8") == 'p\n  a{href="/y"}| x\n'

    def test_all_profiles(self, tmp_path, capsys):
        for profile in ["plain", "html", "xhtml", "xml", "line"]:
            out = tmp_path / f"output_{profile}.slim"
            ret = main([str(SAMPLE_MD), "-o", str(out), "-p", profile])
            assert ret == 0, f"Failed for profile: {profile}"
            assert out.exists()
