from __future__ import annotations

import json
from pathlib import Path
from typing import List, TypedDict

import typer
import yaml

from .assembly import build_submission_package, guess_content_type
from .config import SubmissionConfig, load_config
from .errors import SubmissionError
from .feedback import CallableDisplay, FeedbackUpdate, ReadabilityFeedback
from .models import SubmissionForm, Upload

app = typer.Typer(help="IRB submission readability and packaging CLI.", no_args_is_help=True)

# Color names the terminal can render; anything else prints unstyled.
TERMINAL_COLORS = {
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
    "reset",
    "bright_black",
    "bright_red",
    "bright_green",
    "bright_yellow",
    "bright_blue",
    "bright_magenta",
    "bright_cyan",
    "bright_white",
}


class StatsPayload(TypedDict):
    word_count: int
    sentence_count: int
    syllable_count: int


class ScorePayload(TypedDict):
    available: bool
    grade_level: float | None
    label: str
    color: str
    stats: StatsPayload | None


@app.command()
def score(
    consent_text: str | None = typer.Option(None, "--consent-text"),
    consent_file: Path | None = typer.Option(
        None, "--consent-file", exists=True, readable=True, dir_okay=False
    ),
    study_info_text: str | None = typer.Option(None, "--study-info-text"),
    study_info_file: Path | None = typer.Option(
        None, "--study-info-file", exists=True, readable=True, dir_okay=False
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    drop_empty_tokens: bool | None = typer.Option(
        None,
        "--drop-empty-tokens/--keep-empty-tokens",
        help="Override config drop_empty_tokens flag.",
    ),
) -> None:
    """Score consent and study-information text and emit a JSON summary."""
    cfg = load_config(config)
    if drop_empty_tokens is not None:
        cfg.drop_empty_tokens = drop_empty_tokens
    consent = _resolve_text(consent_text, consent_file)
    study_info = _resolve_text(study_info_text, study_info_file)
    update = _build_feedback(cfg).on_input_change(consent, study_info)
    typer.echo(json.dumps(_score_payload(update), indent=2))


@app.command()
def feedback(
    consent_text: str | None = typer.Option(None, "--consent-text"),
    consent_file: Path | None = typer.Option(
        None, "--consent-file", exists=True, readable=True, dir_okay=False
    ),
    study_info_text: str | None = typer.Option(None, "--study-info-text"),
    study_info_file: Path | None = typer.Option(
        None, "--study-info-file", exists=True, readable=True, dir_okay=False
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
) -> None:
    """Print the reading-level label in the indicator color."""
    cfg = load_config(config)
    consent = _resolve_text(consent_text, consent_file)
    study_info = _resolve_text(study_info_text, study_info_file)
    display = CallableDisplay(
        lambda update: _echo_colored(f"Reading level: {update.label}", update.color)
    )
    _build_feedback(cfg, display).on_input_change(consent, study_info)


@app.command()
def package(
    output_path: Path = typer.Option(..., file_okay=False),
    upload: List[Path] = typer.Option(
        [], "--upload", "-u", exists=True, readable=True, dir_okay=False
    ),
    name: str = typer.Option("", "--name"),
    email: str = typer.Option("", "--email"),
    contact: str = typer.Option("", "--contact"),
    query: str = typer.Option("", "--query"),
    consent_text: str | None = typer.Option(None, "--consent-text"),
    consent_file: Path | None = typer.Option(
        None, "--consent-file", exists=True, readable=True, dir_okay=False
    ),
    study_info_text: str | None = typer.Option(None, "--study-info-text"),
    study_info_file: Path | None = typer.Option(
        None, "--study-info-file", exists=True, readable=True, dir_okay=False
    ),
    not_robot: bool = typer.Option(
        False, "--not-robot", help="Confirm the submission is made by a person."
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
) -> None:
    """Merge the form and uploads into one PDF and save Word originals beside it."""
    cfg = load_config(config)
    form = SubmissionForm(
        name=name,
        email=email,
        contact=contact,
        query=query,
        consent_text=_resolve_text(consent_text, consent_file),
        study_info_text=_resolve_text(study_info_text, study_info_file),
        not_robot=not_robot,
    )
    uploads = [
        Upload(
            filename=path.name,
            content_type=guess_content_type(path.name),
            data=path.read_bytes(),
        )
        for path in upload
    ]
    try:
        result = build_submission_package(form, uploads, cfg)
    except SubmissionError as exc:
        raise typer.BadParameter(str(exc)) from exc

    output_path.mkdir(parents=True, exist_ok=True)
    package_path = output_path / cfg.package_filename
    package_path.write_bytes(result.pdf_bytes)
    for original in result.originals:
        (output_path / original.filename).write_bytes(original.data)
    for skipped in result.skipped:
        typer.echo(f"Skipped unsupported upload: {skipped}", err=True)

    typer.echo(f"Document Reading Level: {result.readability.label}")
    typer.echo(f"Wrote submission package to {package_path}")


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = SubmissionConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


def main() -> None:
    app()


def _resolve_text(text: str | None, path: Path | None) -> str:
    """Prefer an inline value, then a file, then the empty string."""
    if text is not None:
        return text
    if path is not None:
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise typer.BadParameter(f"{path} is not UTF-8 text.") from exc
    return ""


def _echo_colored(message: str, color: str) -> None:
    if color.lower() in TERMINAL_COLORS:
        typer.secho(message, fg=color.lower())
    else:
        typer.echo(message)


def _build_feedback(
    config: SubmissionConfig, display: CallableDisplay | None = None
) -> ReadabilityFeedback:
    return ReadabilityFeedback(
        display, config.feedback, drop_empty_tokens=config.drop_empty_tokens
    )


def _score_payload(update: FeedbackUpdate) -> ScorePayload:
    """Serialize a feedback update so it can be emitted in JSON."""
    stats = update.result.stats
    return {
        "available": update.result.available,
        "grade_level": update.result.grade_level,
        "label": update.label,
        "color": update.color,
        "stats": (
            {
                "word_count": stats.word_count,
                "sentence_count": stats.sentence_count,
                "syllable_count": stats.syllable_count,
            }
            if stats is not None
            else None
        ),
    }


if __name__ == "__main__":
    main()
