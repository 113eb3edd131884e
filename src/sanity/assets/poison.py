"""Anti-scraping markup injection.

Adds an off-screen style rule at the end of ``<head>`` and a hidden decoy
element before every element inside ``<body>``. New markup is spliced into
the original text at the offsets the parser reports, so every byte of the
input survives unchanged.
"""

import re

from bs4 import BeautifulSoup, Tag

POISON_CLASS = "poison"
POISON_TEXT = "POISONING!!!"
POISON_STYLE = f"""
i.{POISON_CLASS} {{
    position: absolute;
    left: -9999px;
    top: -9999px;
    opacity: 0;
}}
"""
STYLE_MARKUP = f"<style>{POISON_STYLE}</style>"
DECOY_MARKUP = f'<i class="{POISON_CLASS}">{POISON_TEXT}</i>'

HEAD_CLOSE = re.compile(r"</head\s*>", re.IGNORECASE)
OPEN_TAG = re.compile(r"""<[^\s/>]+(?:"[^"]*"|'[^']*'|[^'">])*>""")


def _line_starts(text: str) -> list[int]:
    return [0, *(match.end() for match in re.finditer("\n", text))]


def _offset(tag: Tag, line_starts: list[int]) -> int | None:
    """Offset of the ``<`` opening ``tag``; None for tags not in the source."""
    if tag.sourceline is None or tag.sourcepos is None:
        return None
    return line_starts[tag.sourceline - 1] + tag.sourcepos


def _head_insert_offset(html: str, start: int) -> int:
    closing = HEAD_CLOSE.search(html, start)
    if closing is not None:
        return closing.start()
    opening = OPEN_TAG.match(html, start)
    return opening.end() if opening else start


def inject(html: str) -> str:
    """Return ``html`` with decoy markup injected.

    Documents without ``<head>``/``<body>`` are returned with only the
    applicable part injected.
    """
    soup = BeautifulSoup(html, "html.parser")
    line_starts = _line_starts(html)
    insertions: list[tuple[int, str]] = []

    if soup.head is not None:
        start = _offset(soup.head, line_starts)
        if start is not None:
            insertions.append((_head_insert_offset(html, start), STYLE_MARKUP))

    if soup.body is not None:
        for element in soup.body.find_all(True):
            offset = _offset(element, line_starts)
            if offset is not None:
                insertions.append((offset, DECOY_MARKUP))

    pieces = []
    last = 0
    for offset, markup in sorted(insertions, key=lambda item: item[0]):
        pieces.append(html[last:offset])
        pieces.append(markup)
        last = offset
    pieces.append(html[last:])
    return "".join(pieces)
