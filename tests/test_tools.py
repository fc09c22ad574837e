"""
Tests for the external tool adapters.

subprocess.run is replaced, so these tests check the command lines that
would be run, not the tools themselves.
"""

import subprocess
from pathlib import Path

import pytest
from scanbooklet import tools
from scanbooklet.errors import ToolError
from scanbooklet.models import CropMargins, PageDimensions
from scanbooklet.tools import (
    GhostscriptResizer,
    PdfcropCropper,
    PdfjamImposer,
    PdftkBurster,
    PdftkConcatenator,
    PdftkDimensionProbe,
    PdfToolkit,
    require,
    run_command,
)


class RecordingRun:
    """Replacement for subprocess.run."""

    def __init__(self, stdout=b"", returncode=0, side_effect=None):
        self.stdout = stdout
        self.returncode = returncode
        self.side_effect = side_effect
        self.calls = []

    def __call__(self, args, cwd=None, stdout=None, check=False):
        self.calls.append({'args': args, 'cwd': cwd, 'capture': stdout is not None})
        if self.side_effect is not None:
            self.side_effect(args, cwd)
        if check and self.returncode != 0:
            raise subprocess.CalledProcessError(self.returncode, args)
        return subprocess.CompletedProcess(args, self.returncode, stdout=self.stdout)


@pytest.fixture
def fake_run(monkeypatch):
    recorder = RecordingRun()
    monkeypatch.setattr(tools.subprocess, "run", recorder)
    return recorder


class TestRunCommand:
    """Tests for run_command."""

    def test_arguments_stringified(self, fake_run):
        run_command(["pdftk", Path("/a b/in.pdf"), "cat"])

        assert fake_run.calls[0]['args'] == ["pdftk", "/a b/in.pdf", "cat"]
        assert not fake_run.calls[0]['capture']

    def test_output_captured(self, fake_run):
        fake_run.stdout = b"NumberOfPages: 3\n"

        assert run_command(["pdftk", "in.pdf", "dump_data"], get_output=True) == "NumberOfPages: 3\n"

    def test_cwd_passed(self, fake_run, tmp_path):
        run_command(["pdftk"], cwd=tmp_path)

        assert fake_run.calls[0]['cwd'] == str(tmp_path)

    def test_non_zero_exit(self, fake_run):
        """Test that a failing tool becomes a ToolError."""
        fake_run.returncode = 3

        with pytest.raises(ToolError, match="exit status 3: pdfcrop 'a b.pdf'"):
            run_command(["pdfcrop", "a b.pdf"])

    def test_missing_program(self, monkeypatch):
        def missing(*args, **kwargs):
            raise FileNotFoundError("no such file")

        monkeypatch.setattr(tools.subprocess, "run", missing)

        with pytest.raises(ToolError, match="Program not found: pdfjam"):
            run_command(["pdfjam"])


class TestAdapters:
    """Tests for the command lines of each adapter."""

    def test_pdfcrop_with_margins(self, fake_run):
        PdfcropCropper().crop(Path("in.pdf"), Path("out.pdf"), CropMargins.left_half(1200))

        assert fake_run.calls[0]['args'] == [
            "pdfcrop", "--margins", "0 0 -600 0", "in.pdf", "out.pdf",
        ]

    def test_pdfcrop_auto(self, fake_run):
        PdfcropCropper().crop(Path("in.pdf"), Path("out.pdf"))

        assert fake_run.calls[0]['args'] == ["pdfcrop", "in.pdf", "out.pdf"]

    def test_ghostscript_fixed_media(self, fake_run):
        """Test that the resize keeps a fixed media size without fitting."""
        GhostscriptResizer().resize(Path("in.pdf"), Path("out.pdf"), PageDimensions(595.5, 842))

        args = fake_run.calls[0]['args']
        assert args[0] == "gs"
        assert "-dDEVICEWIDTHPOINTS=595.5" in args
        assert "-dDEVICEHEIGHTPOINTS=842" in args
        assert "-dFIXEDMEDIA" in args
        assert "-dPDFFitPage" not in args
        assert "-sOutputFile=out.pdf" in args
        assert args[-1] == "in.pdf"

    def test_ghostscript_large_sizes_not_rounded(self, fake_run):
        GhostscriptResizer().resize(Path("in.pdf"), Path("out.pdf"), PageDimensions(1234567, 612.5615))

        args = fake_run.calls[0]['args']
        assert "-dDEVICEWIDTHPOINTS=1234567" in args
        assert "-dDEVICEHEIGHTPOINTS=612.5615" in args

    def test_pdftk_concatenate_keeps_order(self, fake_run):
        PdftkConcatenator().concatenate([Path("b.pdf"), Path("a.pdf")], Path("out.pdf"))

        assert fake_run.calls[0]['args'] == ["pdftk", "b.pdf", "a.pdf", "cat", "output", "out.pdf"]

    def test_pdfjam_booklet(self, fake_run):
        PdfjamImposer().impose(Path("in.pdf"), Path("out.pdf"))

        assert fake_run.calls[0]['args'] == [
            "pdfjam", "--booklet", "true", "--landscape", "--outfile", "out.pdf", "--", "in.pdf",
        ]

    def test_probe_parses_dump(self, fake_run):
        fake_run.stdout = b"NumberOfPages: 1\nPageMediaRect: 0 0 612 792\n"

        dimensions = PdftkDimensionProbe().measure(Path("half.pdf"))

        assert dimensions == PageDimensions(612, 792)
        assert fake_run.calls[0]['args'] == ["pdftk", "half.pdf", "dump_data"]
        assert fake_run.calls[0]['capture']


class TestPdftkBurster:
    """Tests for the pdftk burst adapter."""

    def test_burst_reads_metadata(self, fake_run, tmp_path):
        """Test that pages are collected in order and doc_data.txt consumed."""
        def write_burst(args, cwd):
            for number in (2, 1, 3):
                (Path(cwd) / f"page_{number:04d}.pdf").write_text("page")
            (Path(cwd) / "doc_data.txt").write_text("NumberOfPages: 3\n")

        fake_run.side_effect = write_burst
        source = tmp_path / "scan.pdf"

        result = PdftkBurster().burst(source, tmp_path)

        assert [path.name for path in result.page_files] == [
            "page_0001.pdf", "page_0002.pdf", "page_0003.pdf",
        ]
        assert result.metadata_text == "NumberOfPages: 3\n"
        assert not (tmp_path / "doc_data.txt").exists()
        assert fake_run.calls[0]['args'] == [
            "pdftk", str(source.resolve()), "burst", "output", "page_%04d.pdf",
        ]
        assert fake_run.calls[0]['cwd'] == str(tmp_path)

    def test_burst_without_metadata(self, fake_run, tmp_path):
        with pytest.raises(ToolError, match="doc_data.txt"):
            PdftkBurster().burst(tmp_path / "scan.pdf", tmp_path)


class TestRequire:
    """Tests for executable checks."""

    def test_present(self, monkeypatch):
        monkeypatch.setattr(tools.shutil, "which", lambda name: f"/usr/bin/{name}")

        require("pdftk")

    def test_missing_with_hint(self, monkeypatch):
        monkeypatch.setattr(tools.shutil, "which", lambda name: None)

        with pytest.raises(ToolError, match="apt install pdftk"):
            require("pdftk")

    def test_external_toolkit_lists_all_missing(self, monkeypatch):
        """Test that every missing program is reported at once."""
        monkeypatch.setattr(
            tools.shutil, "which", lambda name: None if name in ("gs", "pdfjam") else name
        )

        with pytest.raises(ToolError) as excinfo:
            PdfToolkit.external().check_available()

        message = str(excinfo.value)
        assert "'gs'" in message
        assert "'pdfjam'" in message
        assert "'pdftk'" not in message
