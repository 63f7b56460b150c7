import datetime as dt

import pytest

from newsdesk.models import NewsStatus, TargetSite
from newsdesk.services.validation import (
    BODY_REQUIRED,
    INVALID_PUBLISHED_AT,
    INVALID_STATUS,
    INVALID_TARGET_SITE,
    TITLE_REQUIRED,
    NewsValidationError,
    parse_published_at,
    validate_news_form,
)

UTC = dt.timezone.utc
JST = dt.timezone(dt.timedelta(hours=9))


def _reject_message(fields, tzinfo=UTC):
    with pytest.raises(NewsValidationError) as exc:
        validate_news_form(fields, tzinfo)
    return exc.value.message


def test_valid_fields(article_fields):
    form = validate_news_form(article_fields)
    assert form.title == "Launch"
    assert form.body_html == article_fields["body_html"]
    assert form.target_site is TargetSite.BOTH
    assert form.status is NewsStatus.DRAFT
    assert form.published_at == dt.datetime(2025, 1, 1, 10, 0, tzinfo=UTC)


def test_payload_uses_given_body_and_plain_values(article_fields):
    payload = validate_news_form(article_fields).to_payload("<p>Hi</p>")
    assert payload == {
        "title": "Launch",
        "body_html": "<p>Hi</p>",
        "target_site": "BOTH",
        "status": "draft",
        "published_at": dt.datetime(2025, 1, 1, 10, 0, tzinfo=UTC),
    }


def test_title_is_trimmed(article_fields):
    article_fields["title"] = "  Launch day  "
    assert validate_news_form(article_fields).title == "Launch day"


def test_genre_is_accepted_for_title(article_fields):
    del article_fields["title"]
    article_fields["genre"] = "Event"
    assert validate_news_form(article_fields).title == "Event"


@pytest.mark.parametrize("title", [None, "", "   "])
def test_title_required(article_fields, title):
    if title is None:
        del article_fields["title"]
    else:
        article_fields["title"] = title
    assert _reject_message(article_fields) == TITLE_REQUIRED


@pytest.mark.parametrize("body", [None, ""])
def test_body_required(article_fields, body):
    if body is None:
        del article_fields["body_html"]
    else:
        article_fields["body_html"] = body
    assert _reject_message(article_fields) == BODY_REQUIRED


def test_body_that_sanitizes_to_nothing_still_validates(article_fields):
    article_fields["body_html"] = "<script>x</script>"
    assert validate_news_form(article_fields).body_html == "<script>x</script>"


@pytest.mark.parametrize("target", ["lp", "Both", "SP", "", None])
def test_target_site_must_be_known(article_fields, target):
    article_fields["target_site"] = target
    assert _reject_message(article_fields) == INVALID_TARGET_SITE


@pytest.mark.parametrize("status", ["archived", "Draft", "", None])
def test_status_must_be_known(article_fields, status):
    article_fields["status"] = status
    assert _reject_message(article_fields) == INVALID_STATUS


@pytest.mark.parametrize("value", ["not-a-date", "", "2025-13-40T10:00", "tomorrow"])
def test_published_at_must_parse(article_fields, value):
    article_fields["published_at"] = value
    assert _reject_message(article_fields) == INVALID_PUBLISHED_AT


def test_published_at_missing(article_fields):
    del article_fields["published_at"]
    assert _reject_message(article_fields) == INVALID_PUBLISHED_AT


def test_first_violation_wins(article_fields):
    article_fields.update(title="", target_site="nowhere", published_at="not-a-date")
    assert _reject_message(article_fields) == TITLE_REQUIRED

    article_fields.update(title="ok", body_html="")
    assert _reject_message(article_fields) == BODY_REQUIRED

    article_fields.update(body_html="<p>x</p>")
    assert _reject_message(article_fields) == INVALID_TARGET_SITE


def test_empty_submission_reports_title_first():
    assert _reject_message({}) == TITLE_REQUIRED


def test_non_string_values_are_rejected(article_fields):
    article_fields["target_site"] = ["LP"]
    assert _reject_message(article_fields) == INVALID_TARGET_SITE


# ---------------------------------------------------------------------------
# published_at normalization
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("value,tzinfo,expected", [
    ("2025-01-01T10:00", UTC, dt.datetime(2025, 1, 1, 10, 0, tzinfo=UTC)),
    ("2025-01-01T10:00", JST, dt.datetime(2025, 1, 1, 1, 0, tzinfo=UTC)),
    ("2025-01-01T10:00:00Z", JST, dt.datetime(2025, 1, 1, 10, 0, tzinfo=UTC)),
    ("2025-01-01T10:00:00.000Z", UTC, dt.datetime(2025, 1, 1, 10, 0, tzinfo=UTC)),
    ("2025-01-01T10:00:00+09:00", UTC, dt.datetime(2025, 1, 1, 1, 0, tzinfo=UTC)),
    ("2025-01-01", UTC, dt.datetime(2025, 1, 1, 0, 0, tzinfo=UTC)),
    ("Wed, 01 Jan 2025 10:00:00 +0100", UTC, dt.datetime(2025, 1, 1, 9, 0, tzinfo=UTC)),
])
def test_parse_published_at_normalizes_to_utc(value, tzinfo, expected):
    parsed = parse_published_at(value, tzinfo)
    assert parsed == expected
    assert parsed.utcoffset() == dt.timedelta(0)


def test_naive_input_uses_given_timezone(article_fields):
    form = validate_news_form(article_fields, JST)
    assert form.published_at == dt.datetime(2025, 1, 1, 1, 0, tzinfo=UTC)
