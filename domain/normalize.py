"""Textual repair of model output before it is parsed as JSON.

The passes run in a fixed order:

1. strip markdown code fences,
2. drop everything after the last closing brace (citation lists and the like),
3. remove inline ``[label](url)`` footnote links,
4. escape literal double quotes inside ``comments`` and ``instructions`` strings.

Nothing here checks that the result is JSON. Anything still broken fails when
the text is parsed.

Quote repair is a heuristic. A quote ends a string only when it is followed by
what may legally come next in that position: ``,`` plus the start of another
string, or the closing bracket. Known failure modes: a literal quote inside an
instruction that is itself followed by ``, "`` (e.g. ``Add "salt", "pepper"``)
is taken as the end of the entry, and fields other than ``comments`` and
``instructions`` are never repaired.
"""
import re


_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)
# [^\S\n] is whitespace other than a newline, links never span lines
_FOOTNOTE_LINK = re.compile(r"[^\S\n]*\[[^\[\]\n]*\]\([^)\n]*\)")

_COMMENTS_START = re.compile(r'"comments"\s*:\s*"')
_COMMENTS_END = re.compile(r'\s*(?:,\s*"|\}|$)')
_INSTRUCTIONS_START = re.compile(r'"instructions"\s*:\s*\[')
_ENTRY_START = re.compile(r'\s*"')
_ENTRY_SEPARATOR = re.compile(r"\s*,")
_ENTRY_END = re.compile(r'\s*(?:,\s*"|\])')


def strip_fences(text: str) -> str:
    return _FENCE.sub("", text)


def truncate_trailing(text: str) -> str:
    end = text.rfind("}")
    if end == -1:
        return text
    return text[: end + 1]


def strip_footnote_links(text: str) -> str:
    return _FOOTNOTE_LINK.sub("", text)


def _repair_string(text: str, start: int, end: re.Pattern[str]) -> tuple[str, int]:
    """Escape stray quotes in the string body beginning at ``start``.

    Returns the repaired body and the index of its closing quote, or the end
    of the text when the string never closes.
    """
    body: list[str] = []
    i = start
    while i < len(text):
        char = text[i]
        if char == "\\":
            body.append(text[i : i + 2])
            i += 2
            continue
        if char == '"':
            if end.match(text, i + 1):
                return "".join(body), i
            body.append('\\"')
        else:
            body.append(char)
        i += 1
    return "".join(body), len(text)


def _repair_comments(text: str) -> str:
    out: list[str] = []
    pos = 0
    for match in _COMMENTS_START.finditer(text):
        if match.start() < pos:
            continue
        body, close = _repair_string(text, match.end(), _COMMENTS_END)
        out.append(text[pos : match.end()])
        out.append(body)
        pos = close
    out.append(text[pos:])
    return "".join(out)


def _repair_instructions(text: str) -> str:
    out: list[str] = []
    pos = 0
    for match in _INSTRUCTIONS_START.finditer(text):
        if match.start() < pos:
            continue
        out.append(text[pos : match.end()])
        pos = match.end()
        while entry := _ENTRY_START.match(text, pos):
            body, close = _repair_string(text, entry.end(), _ENTRY_END)
            out.append(text[pos : entry.end()])
            out.append(body)
            pos = close
            if pos >= len(text):
                break
            out.append('"')
            pos += 1
            separator = _ENTRY_SEPARATOR.match(text, pos)
            if separator is None:
                break
            out.append(separator.group())
            pos = separator.end()
    out.append(text[pos:])
    return "".join(out)


def repair_quotes(text: str) -> str:
    return _repair_instructions(_repair_comments(text))


def normalize(raw: str) -> str:
    text = strip_fences(raw)
    text = truncate_trailing(text)
    text = strip_footnote_links(text)
    text = repair_quotes(text)
    return text.strip()
