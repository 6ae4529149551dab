"""Pipeline error taxonomy.

Only ``EmptyInputError`` and ``ExtractionUnavailableError`` terminate a
request. Translation problems degrade to the original text and are never
raised; an empty search or a remove of an absent item is a normal outcome.
"""

from __future__ import annotations


class VoiceCartError(Exception):
    """Base class for errors that end a command early."""


class EmptyInputError(VoiceCartError):
    """The command text was empty or whitespace. Rejected before any network call."""


class ExtractionUnavailableError(VoiceCartError):
    """The intent backend failed or returned an unusable payload.

    Malformed payloads (no JSON, unknown intent tag, missing item) land here
    too, so callers only have to handle one failure kind.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint or (
            "Check the intent backend credential (HF_API_KEY / ANTHROPIC_API_KEY) "
            "and ensure the backend is reachable."
        )
