from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable

from .config import FeedbackSettings
from .models import ReadabilityResult
from .scoring import score_text
from .tokenization import combine_texts


@dataclass(slots=True)
class FeedbackUpdate:
    """What the indicator shows after one input change."""

    label: str
    color: str
    result: ReadabilityResult


class FeedbackDisplay(ABC):
    """Abstract sink for readability label and color updates."""

    @abstractmethod
    def show(self, update: FeedbackUpdate) -> None:
        """Render the latest readability update."""
        raise NotImplementedError


class NullDisplay(FeedbackDisplay):
    """Discards updates."""

    def show(self, update: FeedbackUpdate) -> None:
        return None


class CallableDisplay(FeedbackDisplay):
    """Adapt an arbitrary callable into the FeedbackDisplay interface."""

    def __init__(self, func: Callable[[FeedbackUpdate], None]) -> None:
        self._func = func

    def show(self, update: FeedbackUpdate) -> None:
        self._func(update)


class ReadabilityFeedback:
    """
    Recompute the combined consent + study-information score on every input
    change and push the result to a display.

    Both field values are passed in on each call; nothing is cached between
    calls, so the most recent call always determines what is shown.
    """

    def __init__(
        self,
        display: FeedbackDisplay | None = None,
        settings: FeedbackSettings | None = None,
        *,
        drop_empty_tokens: bool = False,
    ) -> None:
        self._display = display or NullDisplay()
        self._settings = settings or FeedbackSettings()
        self._drop_empty_tokens = drop_empty_tokens

    def on_input_change(self, consent_text: str, study_info_text: str) -> FeedbackUpdate:
        result = score_text(
            combine_texts(consent_text, study_info_text),
            drop_empty_tokens=self._drop_empty_tokens,
            unavailable_label=self._settings.unavailable_label,
        )
        update = FeedbackUpdate(
            label=result.label, color=self.color_for(result), result=result
        )
        self._display.show(update)
        return update

    def on_consent_change(self, consent_text: str, study_info_text: str) -> FeedbackUpdate:
        return self.on_input_change(consent_text, study_info_text)

    def on_study_info_change(
        self, consent_text: str, study_info_text: str
    ) -> FeedbackUpdate:
        return self.on_input_change(consent_text, study_info_text)

    def color_for(self, result: ReadabilityResult) -> str:
        """Pick the indicator color for a result."""
        if result.grade_level is None:
            return self._settings.unavailable_color
        if result.grade_level >= self._settings.highlight_grade_level:
            return self._settings.highlight_color
        return self._settings.default_color
