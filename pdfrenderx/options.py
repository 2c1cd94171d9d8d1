"""Translation of conversion options into per-tool argument vectors.

Each builder takes the full options mapping, reads only its own subset and
returns the arguments in the order the caller supplied the options. Values
are not validated here; whatever the caller passes is handed to the tool and
rejected there.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from enum import Enum
from typing import Any, Callable

METADATA_OPTIONS = ("author", "keywords", "subject", "title")
SECURITY_OPTIONS = ("password", "edit_password", "modify", "print")
RENDER_OPTIONS = ("dpi", "margin", "orientation", "page_height", "page_size", "page_width")

# exiftool: rewrite in place, first pass wipes every existing tag.
METADATA_BASE_ARGS = ["-overwrite_original"]
METADATA_CLEAR_ARGS = ["-overwrite_original", "-all:all="]

# Side order for positional margins: top, right, bottom, left.
MARGIN_FLAGS = ("-T", "-R", "-B", "-L")

KEY_LENGTH = "256"
DEFAULT_MODIFY = "annotate"
DEFAULT_PRINT = "full"

Options = Mapping[str, Any]


def stringify(value: Any) -> str:
    """Render an option value the way it appears on a command line."""

    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def select(options: Options | None, keys: Iterable[str]) -> Iterator[tuple[str, Any]]:
    """Yield ``(key, value)`` pairs for *keys* present in *options*.

    Caller order is preserved and ``None`` values count as absent.
    """

    if not options:
        return
    wanted = set(keys)
    for key, value in options.items():
        if key in wanted and value is not None:
            yield key, value


def _margin_args(margin: Any) -> list[str]:
    if isinstance(margin, str) or not isinstance(margin, (Mapping, Iterable)):
        value = stringify(margin)
        return [flag for side in MARGIN_FLAGS for flag in (side, value)]
    if isinstance(margin, Mapping):
        args: list[str] = []
        for side, value in margin.items():
            args.extend([f"--margin-{stringify(side)}", stringify(value)])
        return args
    # zip() stops at the shorter sequence, so [5, 10] only sets top and right.
    return [flag for side, value in zip(MARGIN_FLAGS, margin) for flag in (side, stringify(value))]


def _flag(name: str) -> Callable[[Any], list[str]]:
    return lambda value: [name, stringify(value)]


_RENDER_BUILDERS: dict[str, Callable[[Any], list[str]]] = {
    "dpi": _flag("--dpi"),
    "margin": _margin_args,
    "orientation": _flag("--orientation"),
    "page_height": _flag("--page-height"),
    "page_size": _flag("--page-size"),
    "page_width": _flag("--page-width"),
}


def render_args(options: Options | None) -> list[str]:
    """Arguments for wkhtmltopdf, excluding the source and destination paths."""

    args: list[str] = []
    for key, value in select(options, RENDER_OPTIONS):
        args.extend(_RENDER_BUILDERS[key](value))
    return args


def _keywords(value: Any) -> str:
    if isinstance(value, str):
        return value
    if not isinstance(value, Iterable):
        return stringify(value)
    return " ".join(stringify(keyword) for keyword in value)


_METADATA_BUILDERS: dict[str, Callable[[Any], str]] = {
    "author": lambda value: "-Author=" + stringify(value),
    "keywords": lambda value: "-keywords=" + _keywords(value),
    "subject": lambda value: "-Subject=" + stringify(value),
    "title": lambda value: "-Title=" + stringify(value),
}


def metadata_args(options: Options | None) -> list[str]:
    """Arguments for the second exiftool pass, which writes the selected fields."""

    args = list(METADATA_BASE_ARGS)
    for key, value in select(options, METADATA_OPTIONS):
        args.append(_METADATA_BUILDERS[key](value))
    return args


def security_args(options: Options | None) -> list[str]:
    """Arguments for qpdf.

    The document is always linearized. Encryption is only requested when at
    least one security option is given; missing ones fall back to an empty
    password, ``annotate`` modification and ``full`` printing.
    """

    security = dict(select(options, SECURITY_OPTIONS))
    args = ["--linearize"]
    if security:
        args.extend(
            [
                "--encrypt",
                stringify(security.get("password", "")),
                stringify(security.get("edit_password", "")),
                KEY_LENGTH,
                f"--modify={stringify(security.get('modify', DEFAULT_MODIFY))}",
                f"--print={stringify(security.get('print', DEFAULT_PRINT))}",
                "--",
            ]
        )
    return args


__all__ = [
    "METADATA_OPTIONS",
    "SECURITY_OPTIONS",
    "RENDER_OPTIONS",
    "METADATA_BASE_ARGS",
    "METADATA_CLEAR_ARGS",
    "MARGIN_FLAGS",
    "render_args",
    "metadata_args",
    "security_args",
    "select",
    "stringify",
]
