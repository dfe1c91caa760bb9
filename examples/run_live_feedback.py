"""
Tiny helper script that replays a sequence of form edits through the live
readability indicator and prints each update.
"""

from __future__ import annotations

from irb_submission.config import load_config
from irb_submission.feedback import CallableDisplay, FeedbackUpdate, ReadabilityFeedback

EDITS = [
    ("You may stop.", ""),
    ("You may stop at any time.", "We will ask you ten questions."),
    (
        "You may stop at any time.",
        "Investigational methodologies are evaluated comprehensively.",
    ),
]


def _print_update(update: FeedbackUpdate) -> None:
    print(f"{update.label:<20} {update.color}")


def main() -> None:
    config = load_config()
    feedback = ReadabilityFeedback(
        CallableDisplay(_print_update),
        config.feedback,
        drop_empty_tokens=config.drop_empty_tokens,
    )
    for consent_text, study_info_text in EDITS:
        feedback.on_input_change(consent_text, study_info_text)


if __name__ == "__main__":
    main()
