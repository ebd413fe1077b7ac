"""Tests for the command-line entry point."""

import json

from asset_extractor.cli import build_parser, main


def test_parser_requires_command():
    parser = build_parser()
    args = parser.parse_args(["extract", "job.pdf", "--job-id", "5", "--timeout", "30"])
    assert args.command == "extract"
    assert args.job_id == "5"
    assert args.timeout == 30.0
    assert args.out == "uploads"


def test_analyze_prints_classification(make_pdf, capsys, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    pdf_path = make_pdf([{"text": "Circuit Map Change Sheet"}, {"text": "tag sheet"}])

    assert main(["--no-vision", "analyze", pdf_path]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["maps"] == [1]
    assert data["forms"] == [2]
    assert data["totalPages"] == 2


def test_extract_writes_manifest(make_pdf, tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    pdf_path = make_pdf([{"text": "pole sheet drawing"}])

    assert main(["extract", pdf_path, "--job-id", "j1", "--out", str(tmp_path)]) == 0

    out = capsys.readouterr().out
    assert "Extracted 1 drawings, 0 maps, 0 photos from 1 pages" in out
    assert (tmp_path / "job_j1" / "extraction_manifest.json").is_file()
    assert (tmp_path / "job_j1" / "drawings" / "drawing_page_1.jpg").is_file()
