"""
Content-Disposition values for downloads.

ASCII-printable names get a single quoted ``filename`` parameter. Anything
else gets an ASCII fallback plus an RFC 5987 ``filename*`` parameter carrying
the percent-encoded UTF-8 original (RFC 6266 section 4.3).
"""

import re
from urllib.parse import quote

_NON_PRINTABLE_ASCII = re.compile(r"[^\x20-\x7e]")
_QUOTE_OR_BACKSLASH = re.compile(r'["\\]')

# Same unreserved set as JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "!~*'()"


def build_content_disposition(filename: str) -> str:
    if _NON_PRINTABLE_ASCII.search(filename):
        fallback = _QUOTE_OR_BACKSLASH.sub("_", _NON_PRINTABLE_ASCII.sub("_", filename))
        encoded = quote(filename, safe=_URI_COMPONENT_SAFE)
        return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{encoded}"

    escaped = _QUOTE_OR_BACKSLASH.sub(lambda m: "\\" + m.group(0), filename)
    return f'attachment; filename="{escaped}"'
