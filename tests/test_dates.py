from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from pdfpagedom.core.dates import PdfDate, format_pdf_date, parse_pdf_date
from pdfpagedom.exceptions import DateParseError


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("D:2023", datetime(2023, 1, 1, tzinfo=timezone.utc)),
        ("D:202306", datetime(2023, 6, 1, tzinfo=timezone.utc)),
        ("D:20230615103000Z", datetime(2023, 6, 15, 10, 30, tzinfo=timezone.utc)),
        ("20230615103000", datetime(2023, 6, 15, 10, 30, tzinfo=timezone.utc)),
        (
            "D:20230615103000+05'30'",
            datetime(2023, 6, 15, 10, 30, tzinfo=timezone(timedelta(hours=5, minutes=30))),
        ),
        (
            "D:20230615103000-08'00",
            datetime(2023, 6, 15, 10, 30, tzinfo=timezone(timedelta(hours=-8))),
        ),
    ],
)
def test_parse_pdf_date(text, expected):
    assert parse_pdf_date(text) == expected


@pytest.mark.parametrize("text", ["", "D:", "yesterday", "D:20231301", "D:20230615103000X"])
def test_invalid_dates_raise(text):
    with pytest.raises(DateParseError):
        parse_pdf_date(text)


def test_date_parse_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_pdf_date("nope")


def test_pdf_date_keeps_original_text():
    date = PdfDate.parse("D:20240229")

    assert date.value.day == 29
    assert date.to_pdf_object() == "D:20240229"


def test_format_pdf_date():
    assert format_pdf_date(datetime(2024, 3, 4, 5, 6, 7, tzinfo=timezone.utc)) == "D:20240304050607Z"
    assert (
        format_pdf_date(datetime(2024, 3, 4, 5, 6, 7, tzinfo=timezone(timedelta(hours=-3, minutes=-30))))
        == "D:20240304050607-03'30'"
    )
    assert format_pdf_date(datetime(2024, 3, 4)) == "D:20240304000000"
