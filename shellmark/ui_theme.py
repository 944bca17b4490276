"""UI palettes for the browser.

Themes are plain ANSI prefixes; ``MONO_THEME`` disables colour while keeping
bold/reverse markers so the highlight stays visible.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    border: str
    title: str
    prompt: str
    bookmark_name: str
    bookmark_dest: str
    match: str
    selected: str
    dialog_border: str
    dialog_text: str
    help_key: str
    help_dim: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    border="\033[38;5;245m",
    title="\033[1;38;5;45m",
    prompt="\033[1;38;5;81m",
    bookmark_name="\033[32m",
    bookmark_dest="\033[38;5;252m",
    match="\033[31m",
    selected="\033[1m",
    dialog_border="\033[38;5;214m",
    dialog_text="\033[1;38;5;229m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
)

MONO_THEME = UITheme(
    name="mono",
    reset="\033[0m",
    border="",
    title="\033[1m",
    prompt="\033[1m",
    bookmark_name="",
    bookmark_dest="",
    match="\033[4m",
    selected="\033[1m",
    dialog_border="",
    dialog_text="\033[1m",
    help_key="\033[1m",
    help_dim="",
)


def resolve_theme(no_color: bool) -> UITheme:
    return MONO_THEME if no_color else DEFAULT_THEME
