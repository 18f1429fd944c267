from datetime import datetime, timedelta, timezone

import pytest

from admin_dashboard.data.models import FeedbackSubmission, WaitlistSubmission, submissions_to_frame

TZ = "Asia/Seoul"


@pytest.fixture
def sample_submissions():
    """Five submissions around 2024-01-05 in Seoul time, one with a bad timestamp."""
    return [
        # 2024-01-05 10:00 KST
        WaitlistSubmission(id="w1", email="a@b.com", created_at="2024-01-05T01:00:00Z", organization="Acme"),
        # 2024-01-05 23:30 KST
        FeedbackSubmission(id="f1", feedback='Great, "very" good', created_at="2024-01-05T14:30:00Z"),
        # 2024-01-06 00:30 KST
        WaitlistSubmission(id="w2", email="c@d.com", created_at="2024-01-05T15:30:00Z"),
        # 2024-01-04 23:59:59.999 KST
        FeedbackSubmission(id="f2", feedback="ok", created_at="2024-01-04T14:59:59.999Z", organization="Uni"),
        WaitlistSubmission(id="w3", email="e@f.com", created_at="not a date"),
    ]


@pytest.fixture
def sample_frame(sample_submissions):
    return submissions_to_frame(sample_submissions, TZ)


@pytest.fixture
def many_frame():
    """45 waitlist submissions one minute apart, oldest first."""
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    subs = [
        WaitlistSubmission(id=f"w{i}", email=f"user{i}@example.com", created_at=(base + timedelta(minutes=i)).isoformat())
        for i in range(45)
    ]
    return submissions_to_frame(subs, TZ)
