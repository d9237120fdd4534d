"""Jinja filters registered on every storefront environment."""
import re
from datetime import date, datetime, timezone

from dateutil import parser as date_parser
from markupsafe import Markup, escape

from storefront.utils.json_fields import parse_json_field

_TAG_RE = re.compile(r"<[^>]*>")
_NEWLINE_RE = re.compile(r"\r\n|\r|\n")


def format_date(value, fmt="%Y-%m-%d"):
    """
    Format datetimes, dates, ISO strings or epoch seconds with a strftime
    format. Anything unparseable renders as an empty string.
    """
    if value is None or value == "":
        return ""

    if isinstance(value, (datetime, date)):
        moment = value
    elif isinstance(value, bool):
        return ""
    elif isinstance(value, (int, float)):
        try:
            moment = datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return ""
    elif isinstance(value, str):
        try:
            moment = date_parser.parse(value)
        except (ValueError, OverflowError):
            return ""
    else:
        return ""

    return moment.strftime(fmt)


def strip_html(value):
    if not value:
        return ""
    return _TAG_RE.sub("", str(value))


def truncate(value, length=255):
    if not value:
        return ""
    text = str(value)
    if len(text) <= length:
        return text
    return text[:length] + "..."


def parse_json(value):
    parsed = parse_json_field(value)
    return {} if parsed is None else parsed


def newline_to_br(value):
    """
    Escape the text, then turn line breaks into ``<br>``. The result is
    already safe, so templates do not need ``|safe`` and user text can
    never inject markup.
    """
    if value is None or value == "":
        return ""
    escaped = str(escape(str(value)))
    return Markup(_NEWLINE_RE.sub("<br>", escaped))


STOREFRONT_FILTERS = {
    "date": format_date,
    "strip_html": strip_html,
    "truncate": truncate,
    "json": parse_json,
    "newline_to_br": newline_to_br,
}
