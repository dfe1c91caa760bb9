import json
from pathlib import Path

from typer.testing import CliRunner

from irb_submission.cli import app
from tests.utils import make_docx_bytes, make_png_bytes, page_texts, write_bytes

runner = CliRunner()


def test_cli_score_outputs_summary():
    """score command reports counts, grade level, band and color as JSON."""
    result = runner.invoke(
        app,
        ["score", "--consent-text", "The cat sat.", "--study-info-text", "It ran fast."],
    )
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["available"] is True
    assert payload["label"] == "Kindergarten"
    assert payload["color"] == "green"
    assert payload["stats"]["word_count"] == 7


def test_cli_score_drop_empty_tokens(tmp_path: Path):
    """score command reads files and honors the empty-token override."""
    consent = tmp_path / "consent.txt"
    consent.write_text("The cat sat.", encoding="utf-8")
    result = runner.invoke(
        app,
        [
            "score",
            "--consent-file",
            str(consent),
            "--study-info-text",
            "It ran fast.",
            "--drop-empty-tokens",
        ],
    )
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["stats"]["word_count"] == 6


def test_cli_score_without_text_is_unavailable(tmp_path: Path):
    """score command falls back to the unavailable state and config colors."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text("feedback:\n  unavailable_color: cyan\n", encoding="utf-8")
    result = runner.invoke(app, ["score", "--config", str(config_path)])
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["available"] is False
    assert payload["grade_level"] is None
    assert payload["stats"] is None
    assert payload["color"] == "cyan"


def test_cli_feedback_prints_label():
    result = runner.invoke(
        app,
        ["feedback", "--consent-text", "The cat sat.", "--study-info-text", "It ran."],
    )
    assert result.exit_code == 0
    assert "Reading level: Kindergarten" in result.stdout


def test_cli_package_writes_pdf_and_originals(tmp_path: Path):
    """package command writes the merged PDF plus original Word files."""
    image = write_bytes(tmp_path / "scan.png", make_png_bytes())
    word = write_bytes(tmp_path / "notes.docx", make_docx_bytes(["We thank you."]))
    consent = tmp_path / "consent.txt"
    consent.write_text("You may stop at any time.", encoding="utf-8")
    output_dir = tmp_path / "out"

    result = runner.invoke(
        app,
        [
            "package",
            "--output-path",
            str(output_dir),
            "--upload",
            str(image),
            "--upload",
            str(word),
            "--name",
            "Ada Researcher",
            "--consent-file",
            str(consent),
            "--not-robot",
        ],
    )
    assert result.exit_code == 0
    package_path = output_dir / "submission-package.pdf"
    assert package_path.exists()
    assert (output_dir / "original-notes.docx").read_bytes() == word.read_bytes()
    texts = page_texts(package_path.read_bytes())
    assert "Name: Ada Researcher" in texts[0]
    assert "Document Reading Level:" in texts[-1]
    assert "Document Reading Level:" in result.stdout


def test_cli_package_requires_robot_confirmation(tmp_path: Path):
    image = write_bytes(tmp_path / "scan.png", make_png_bytes())
    result = runner.invoke(
        app,
        ["package", "--output-path", str(tmp_path / "out"), "--upload", str(image)],
    )
    assert result.exit_code != 0
    assert not (tmp_path / "out").exists()


def test_cli_print_config():
    """print-config command dumps the current configuration values."""
    result = runner.invoke(app, ["print-config"])
    assert result.exit_code == 0
    assert "drop_empty_tokens" in result.stdout
    assert "highlight_grade_level" in result.stdout


def test_cli_feedback_prints_plain_label_for_unknown_color(tmp_path: Path):
    """feedback command still prints when the configured color is not a terminal color."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text("feedback:\n  default_color: orange\n", encoding="utf-8")
    result = runner.invoke(
        app,
        [
            "feedback",
            "--config",
            str(config_path),
            "--consent-text",
            "The cat sat.",
        ],
    )
    assert result.exit_code == 0
    assert "Reading level: Kindergarten" in result.stdout


def test_cli_package_accepts_inline_prose(tmp_path: Path):
    image = write_bytes(tmp_path / "scan.png", make_png_bytes())
    output_dir = tmp_path / "out"
    result = runner.invoke(
        app,
        [
            "package",
            "--output-path",
            str(output_dir),
            "--upload",
            str(image),
            "--consent-text",
            "You may stop at any time.",
            "--study-info-text",
            "We ask ten questions.",
            "--not-robot",
        ],
    )
    assert result.exit_code == 0
    first_page = page_texts((output_dir / "submission-package.pdf").read_bytes())[0]
    assert "You may stop at any time." in first_page
    assert "We ask ten questions." in first_page
