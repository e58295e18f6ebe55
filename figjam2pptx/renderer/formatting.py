"""Text helpers shared by the serializers: escaping, numbers, timestamps."""

import math
import re
from datetime import datetime, timezone
from typing import Any

# Characters XML 1.0 does not allow anywhere in a document
INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def strip_invalid_xml_chars(text: str) -> str:
    """Remove control characters and other code points XML 1.0 forbids."""
    return INVALID_XML_CHARS.sub("", text)


def escape_xml(text: Any) -> str:
    """Escape special XML characters.

    Ampersands go first so existing entities are not escaped twice.
    Characters XML cannot represent are dropped.
    """
    if not isinstance(text, str):
        text = format_value(text)
    return (strip_invalid_xml_chars(text)
            .replace("&", "&amp;")
            .replace("<", "&lt;")
            .replace(">", "&gt;")
            .replace('"', "&quot;")
            .replace("'", "&apos;"))


def cdata(text: str) -> str:
    """Wrap text in a CDATA section.

    A literal ``]]>`` would end the section early, so it is split across
    two sections. Characters XML cannot represent are dropped.
    """
    return "<![CDATA[" + strip_invalid_xml_chars(text).replace("]]>", "]]]]><![CDATA[>") + "]]>"


def format_number(value: Any) -> str:
    """Format a number the way JavaScript prints it by default.

    Integral floats lose their '.0', tiny and huge magnitudes use
    '1e-7' / '1e+21' style exponents.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if not isinstance(value, float):
        return str(value)

    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    text = repr(value)
    mantissa, _, exp = text.partition("e")
    if not exp:
        return text

    exponent = int(exp)
    if -7 < exponent < 21:
        return _expand_exponent(mantissa, exponent)
    return f"{mantissa}e{'+' if exponent > 0 else '-'}{abs(exponent)}"


def _expand_exponent(mantissa: str, exponent: int) -> str:
    """Write a negative-exponent float in plain decimal form."""
    sign = "-" if mantissa.startswith("-") else ""
    digits = mantissa.lstrip("-").replace(".", "")
    return f"{sign}0.{'0' * (-exponent - 1)}{digits}"


def format_value(value: Any) -> str:
    """Default text form for any value placed in markup."""
    if value is None:
        return ""
    if isinstance(value, (bool, int, float)):
        return format_number(value)
    return str(value)


def format_timestamp(moment: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with milliseconds, e.g. 2024-05-01T12:00:00.000Z."""
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    stamp = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")
