"""
Submission records returned by the submissions API.

A submission is either a waitlist signup or a feedback entry. Each variant
carries only the field that makes sense for it, and both expose the text
shown in the "email / feedback" column as ``display_text``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, ClassVar, Iterable, List, Mapping, Optional, Union

import pandas as pd

from admin_dashboard.config import DEFAULT_TIMEZONE, FEEDBACK, WAITLIST

# ISO date-only strings (YYYY-MM-DD) denote UTC midnight
_DATE_ONLY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

FRAME_COLUMNS: List[str] = [
    "id",
    "type",
    "display_text",
    "organization",
    "created_at_raw",
    "created_at",
    "created_at_parse_ok",
]


class InvalidSubmissionError(ValueError):
    """Raised when a JSON record cannot be turned into a submission."""


@dataclass(frozen=True)
class WaitlistSubmission:
    id: str
    email: str
    created_at: str
    organization: Optional[str] = None

    type: ClassVar[str] = WAITLIST

    @property
    def display_text(self) -> str:
        return self.email


@dataclass(frozen=True)
class FeedbackSubmission:
    id: str
    feedback: str
    created_at: str
    organization: Optional[str] = None

    type: ClassVar[str] = FEEDBACK

    @property
    def display_text(self) -> str:
        return self.feedback


Submission = Union[WaitlistSubmission, FeedbackSubmission]


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def parse_submission(record: Mapping[str, Any]) -> Submission:
    """Build the matching submission variant from an API record."""
    if not isinstance(record, Mapping):
        raise InvalidSubmissionError(f"Expected an object, got {type(record).__name__}")

    record_id = record.get("id")
    if record_id is None or str(record_id) == "":
        raise InvalidSubmissionError("Submission is missing an id")

    created_at = record.get("createdAt")
    created_at = "" if created_at is None else str(created_at)
    organization = _optional_text(record.get("organization"))

    kind = record.get("type")
    if kind == WAITLIST:
        return WaitlistSubmission(
            id=str(record_id),
            email=str(record.get("email") or ""),
            created_at=created_at,
            organization=organization,
        )
    if kind == FEEDBACK:
        return FeedbackSubmission(
            id=str(record_id),
            feedback=str(record.get("feedback") or ""),
            created_at=created_at,
            organization=organization,
        )
    raise InvalidSubmissionError(f"Unknown submission type {kind!r} for id {record_id}")


def parse_created_at(value: Any, tz: str = DEFAULT_TIMEZONE) -> pd.Timestamp:
    """Parse a createdAt value into a timestamp in ``tz``.

    Values carrying an offset are converted. A bare date (``2024-01-05``) is
    UTC midnight; other naive values are read as local time in ``tz``, shifted
    past a DST gap. Anything unparseable yields NaT.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return pd.NaT
    try:
        ts = pd.to_datetime(value, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return pd.NaT
    if not isinstance(ts, pd.Timestamp) or pd.isna(ts):
        return pd.NaT
    if ts.tzinfo is None:
        if isinstance(value, str) and _DATE_ONLY_RE.match(value.strip()):
            return ts.tz_localize("UTC").tz_convert(tz)
        return ts.tz_localize(tz, ambiguous=True, nonexistent="shift_forward")
    return ts.tz_convert(tz)


def submissions_to_frame(
    submissions: Iterable[Submission],
    tz: str = DEFAULT_TIMEZONE,
) -> pd.DataFrame:
    """Tabular view of the submissions, one row per record in input order."""
    rows = [
        {
            "id": sub.id,
            "type": sub.type,
            "display_text": sub.display_text,
            "organization": sub.organization,
            "created_at_raw": sub.created_at,
        }
        for sub in submissions
    ]
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS[:5])
    parsed = [parse_created_at(raw, tz) for raw in df["created_at_raw"]]
    df["created_at"] = pd.to_datetime(pd.Series(parsed, index=df.index, dtype=object), utc=True).dt.tz_convert(tz)
    df["created_at_parse_ok"] = df["created_at"].notna()
    return df
