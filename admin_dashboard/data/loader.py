"""
Fetch submissions from the remote submissions API.

Every failure path resolves to ``FetchResult(data=[], error=<message>)``;
nothing raises past ``fetch_submissions``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import httpx

from admin_dashboard.config import (
    DEFAULT_REQUEST_TIMEOUT,
    SUBMISSIONS_PATH,
    Settings,
    load_settings,
)
from admin_dashboard.data.models import InvalidSubmissionError, Submission, parse_submission

logger = logging.getLogger(__name__)

REQUEST_HEADERS = {
    "Content-Type": "application/json",
    "Cache-Control": "no-cache",
}


@dataclass
class FetchResult:
    data: List[Submission] = field(default_factory=list)
    error: Optional[str] = None


def submissions_url(base_url: str) -> str:
    return f"{base_url.rstrip('/')}{SUBMISSIONS_PATH}"


def _parse_records(payload) -> List[Submission]:
    submissions: List[Submission] = []
    skipped = 0
    for record in payload:
        try:
            submissions.append(parse_submission(record))
        except InvalidSubmissionError as exc:
            skipped += 1
            logger.warning(f"Skipping submission record: {exc}")
    if skipped:
        logger.warning(f"Skipped {skipped} of {len(payload)} submission records")
    return submissions


def fetch_submissions(
    base_url: str,
    client: Optional[httpx.Client] = None,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
) -> FetchResult:
    """Read the submission collection once.

    Args:
        base_url: API origin, e.g. ``https://example.com``.
        client: optional pre-configured client (used by tests).
        timeout: request timeout in seconds.
    """
    url = submissions_url(base_url)
    try:
        if client is not None:
            response = client.get(url, headers=REQUEST_HEADERS, timeout=timeout, follow_redirects=True)
        else:
            response = httpx.get(url, headers=REQUEST_HEADERS, timeout=timeout, follow_redirects=True)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        # InvalidURL is not an HTTPError subclass
        logger.error(f"Failed to reach submissions API at {url}: {exc}")
        return FetchResult(error=f"Could not load submissions from {base_url}.")

    if not response.is_success:
        logger.warning(f"Submissions API returned status {response.status_code} for {url}")
        return FetchResult(error=f"Failed to fetch submissions (status {response.status_code}).")

    try:
        payload = response.json()
    except ValueError as exc:
        logger.error(f"Submissions API at {url} returned invalid JSON: {exc}")
        return FetchResult(error=f"Could not load submissions from {base_url}.")

    if not isinstance(payload, list):
        logger.error(f"Submissions API at {url} returned {type(payload).__name__}, expected a list")
        return FetchResult(error=f"Could not load submissions from {base_url}.")

    submissions = _parse_records(payload)
    logger.info(f"Fetched {len(submissions)} submissions from {url}")
    return FetchResult(data=submissions)


def load_submissions(settings: Optional[Settings] = None, client: Optional[httpx.Client] = None) -> FetchResult:
    """Wrapper that resolves config and returns submissions newest-first.

    The API lists submissions in creation order; the page shows the most
    recent ones first before any sorting is applied.
    """
    settings = settings or load_settings()
    result = fetch_submissions(settings.api_url, client=client, timeout=settings.request_timeout)
    return FetchResult(data=list(reversed(result.data)), error=result.error)
