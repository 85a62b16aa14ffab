import re


MAX_LENGTH = 200

_NEWLINES = re.compile(r"[\r\n]+")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_WHITESPACE = re.compile(r"\s+")


def sanitize(text: str | None, max_length: int = MAX_LENGTH) -> str:
    """Make user text safe to embed on a single prompt line.

    Truncation happens first, then newlines become spaces, remaining control
    characters are deleted and whitespace is collapsed. Idempotent.
    """
    if not text:
        return ""
    text = text[:max_length]
    text = _NEWLINES.sub(" ", text)
    text = _CONTROL_CHARS.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()
