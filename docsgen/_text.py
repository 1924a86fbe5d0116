"""Line splitting shared by the markdown readers."""

from __future__ import annotations


def split_lines(text: str) -> list[str]:
    r"""Split ``text`` on ``\n``, dropping one trailing ``\r`` from each line.

    Unlike :meth:`str.splitlines`, form feeds, ``\u2028`` and bare ``\r``
    stay inside their line. A trailing newline does not produce an empty
    final line.

    >>> split_lines("a\r\nb\x0cc\n")
    ['a', 'b\x0cc']
    >>> split_lines("")
    []
    """
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


__all__ = ["split_lines"]
