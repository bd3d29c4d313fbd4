"""PDF date strings (ISO 32000-1, 7.9.4)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from pypdf.generic import TextStringObject

from ..constants import PDF_DATE_PREFIX
from ..exceptions import DateParseError

__all__ = ["PdfDate", "parse_pdf_date", "format_pdf_date"]


@dataclass(frozen=True, slots=True)
class PdfDate:
    """Timestamp read from a ``D:YYYYMMDDHHmmSSOHH'mm'`` string."""

    value: datetime
    raw: str

    @classmethod
    def parse(cls, text: str) -> "PdfDate":
        return cls(value=parse_pdf_date(text), raw=text)

    @classmethod
    def from_datetime(cls, value: datetime) -> "PdfDate":
        return cls(value=value, raw=format_pdf_date(value))

    def to_pdf_object(self) -> TextStringObject:
        return TextStringObject(self.raw)


def parse_pdf_date(value: str) -> datetime:
    text = value.strip()
    if text.startswith(PDF_DATE_PREFIX):
        text = text[len(PDF_DATE_PREFIX) :]
    if len(text) < 4 or not text[:4].isdigit():
        raise DateParseError(f"Invalid PDF date: {value!r}")
    try:
        year = int(text[0:4])
        month = int(text[4:6]) if len(text) >= 6 else 1
        day = int(text[6:8]) if len(text) >= 8 else 1
        hour = int(text[8:10]) if len(text) >= 10 else 0
        minute = int(text[10:12]) if len(text) >= 12 else 0
        second = int(text[12:14]) if len(text) >= 14 else 0
    except ValueError as exc:
        raise DateParseError(f"Invalid PDF date: {value!r}") from exc

    tz = timezone.utc
    if len(text) > 14:
        sign = text[14]
        if sign in "+-" and len(text) >= 17:
            try:
                offset_hours = int(text[15:17])
                offset_minutes = int(text[18:20]) if len(text) >= 20 else 0
            except ValueError as exc:
                raise DateParseError(f"Invalid UTC offset in PDF date: {value!r}") from exc
            delta = timedelta(hours=offset_hours, minutes=offset_minutes)
            if sign == "-":
                delta = -delta
            tz = timezone(delta)
        elif sign != "Z":
            raise DateParseError(f"Invalid UTC marker in PDF date: {value!r}")

    try:
        return datetime(year, month, day, hour, minute, second, tzinfo=tz)
    except ValueError as exc:
        raise DateParseError(f"Invalid PDF date: {value!r}") from exc


def format_pdf_date(value: datetime) -> str:
    stamp = value.strftime("%Y%m%d%H%M%S")
    offset = value.utcoffset()
    if offset is None:
        return f"{PDF_DATE_PREFIX}{stamp}"
    if not offset:
        return f"{PDF_DATE_PREFIX}{stamp}Z"
    total_minutes = int(offset.total_seconds() // 60)
    sign = "+" if total_minutes >= 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"{PDF_DATE_PREFIX}{stamp}{sign}{hours:02d}'{minutes:02d}'"
