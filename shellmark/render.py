"""Browser screen rendering.

Builds the full frame (title border, query prompt, candidate table) as one
string of ANSI output, with a confirmation dialog in PendingDelete mode and a
key overview in Help mode drawn on top. Rendering is presentation-only; the
only side effect is the final ``os.write``.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

from .ansi import display_width, fit_ansi_line
from .browse.state import BrowseState, Mode
from .search import match_positions
from .storage import friendly_path
from .ui_theme import DEFAULT_THEME, UITheme

TITLE = "Shellmark"
PROMPT = " > "
HIGHLIGHT_SYMBOL = ">> "
MIN_NAME_COLS = 10
HEADER_ROWS = 3


def colorize_match(text: str, query: str, base: str, theme: UITheme) -> str:
    """Style ``text`` with characters matched by ``query`` highlighted."""
    positions = match_positions(text, query)
    if not positions:
        return f"{base}{text}{theme.reset}" if base else text
    out: list[str] = []
    run: list[str] = []
    run_matched: bool | None = None
    for pos, ch in enumerate(text):
        matched = pos in positions
        if run and matched != run_matched:
            out.append(f"{theme.match if run_matched else base}{''.join(run)}{theme.reset}")
            run = []
        run.append(ch)
        run_matched = matched
    if run:
        out.append(f"{theme.match if run_matched else base}{''.join(run)}{theme.reset}")
    return "".join(out)


def visible_window(selected: int | None, total: int, rows: int) -> int:
    """First candidate row to draw so ``selected`` stays on screen."""
    if rows <= 0 or selected is None or total <= rows:
        return 0
    return max(0, min(selected - rows + 1, total - rows))


def _border_row(
    left: str,
    fill: str,
    right: str,
    inner: int,
    theme: UITheme,
    title: str = "",
    color: str | None = None,
) -> str:
    color = theme.border if color is None else color
    if title and inner >= len(title) + 2:
        body = f"{fill}{theme.reset}{theme.title}{title}{theme.reset}{color}{fill * (inner - len(title) - 1)}"
    else:
        body = fill * inner
    return f"{color}{left}{body}{right}{theme.reset}"


def _framed(content: str, inner: int, theme: UITheme) -> str:
    return f"{theme.border}│{theme.reset}{fit_ansi_line(content, inner)}{theme.reset}{theme.border}│{theme.reset}"


def _name_cols(state: BrowseState, inner: int) -> int:
    longest = max((display_width(bm.name) for bm in state.bookmarks), default=0)
    available = max(MIN_NAME_COLS, (inner - len(HIGHLIGHT_SYMBOL)) // 2)
    return max(MIN_NAME_COLS, min(longest, available))


def build_frame_rows(
    state: BrowseState,
    width: int,
    height: int,
    theme: UITheme = DEFAULT_THEME,
    home: Path | None = None,
) -> list[str]:
    """Return ``height`` rows for the base frame (no overlays)."""
    inner = max(1, width - 2)
    query = state.input.text
    rows = [
        _border_row("┌", "─", "┐", inner, theme, TITLE),
        _framed(f"{theme.prompt}{PROMPT}{theme.reset}{query}", inner, theme),
        _border_row("├", "─", "┤", inner, theme),
    ]

    list_rows = max(0, height - HEADER_ROWS - 1)
    candidates = state.selection.candidates
    start = visible_window(state.selection.selected, len(candidates), list_rows)
    name_cols = _name_cols(state, inner)
    for offset in range(list_rows):
        pos = start + offset
        if pos >= len(candidates):
            rows.append(_framed("", inner, theme))
            continue
        bookmark = state.bookmarks[candidates[pos]]
        is_selected = pos == state.selection.selected
        name_style = theme.bookmark_name
        dest_style = theme.bookmark_dest
        marker = " " * len(HIGHLIGHT_SYMBOL)
        if is_selected:
            name_style = theme.selected + name_style
            dest_style = theme.selected + dest_style
            marker = f"{theme.selected}{HIGHLIGHT_SYMBOL}{theme.reset}"
        name = fit_ansi_line(colorize_match(bookmark.name, query, name_style, theme), name_cols)
        dest = colorize_match(friendly_path(bookmark.dest, home), query, dest_style, theme)
        rows.append(_framed(f"{marker}{name}{theme.reset} {dest}", inner, theme))

    rows.append(_border_row("└", "─", "┘", inner, theme))
    return rows[:height]


def _box_lines(title: str, body: Sequence[str], inner: int, theme: UITheme) -> list[str]:
    lines = [_border_row("╭", "─", "╮", inner, theme, title, color=theme.dialog_border)]
    for text in body:
        content = fit_ansi_line(f" {text}", inner)
        lines.append(f"{theme.dialog_border}│{theme.reset}{content}{theme.dialog_border}│{theme.reset}")
    lines.append(f"{theme.dialog_border}╰{'─' * inner}╯{theme.reset}")
    return lines


def _place_box(lines: Sequence[str], width: int, height: int, box_width: int) -> str:
    x = max(0, (width - box_width) // 2)
    y = max(0, (height - len(lines)) // 2)
    out: list[str] = []
    for i, line in enumerate(lines):
        if y + i >= height:
            break
        out.append(f"\033[{y + i + 1};{x + 1}H{line}")
    return "".join(out)


def delete_dialog(state: BrowseState, width: int, height: int, theme: UITheme = DEFAULT_THEME) -> str:
    bookmark = state.selected_bookmark()
    if bookmark is None:
        question = "Nothing selected. Press n to go back"
    else:
        question = f"Delete bookmark '{bookmark.name}'? (y/n)"
    box_width = min(max(1, width - 2), max(30, display_width(question) + 4))
    inner = max(1, box_width - 2)
    lines = _box_lines(" Confirm ", [f"{theme.dialog_text}{question}{theme.reset}"], inner, theme)
    return _place_box(lines, width, height, box_width)


def help_overlay(
    descriptions: Sequence[tuple[str, str]],
    width: int,
    height: int,
    theme: UITheme = DEFAULT_THEME,
) -> str:
    combo_cols = max((display_width(combo) for combo, _desc in descriptions), default=0)
    body = [
        f"{theme.help_key}{combo.ljust(combo_cols)}{theme.reset}  {desc}"
        for combo, desc in descriptions
    ]
    body.append("")
    body.append(f"{theme.help_dim}Press Esc / F1 / q to close{theme.reset}")
    content_cols = max((display_width(line) for line in body), default=0) + 2
    box_width = min(max(1, width - 2), max(36, content_cols + 2))
    inner = max(1, box_width - 2)
    lines = _box_lines(" Keys ", body[: max(0, height - 2)], inner, theme)
    return _place_box(lines, width, height, box_width)


def cursor_position(state: BrowseState) -> tuple[int, int]:
    """1-based ``(row, col)`` of the text cursor inside the prompt."""
    before = "".join(state.input.chars[: state.input.cursor])
    return 2, 2 + len(PROMPT) + display_width(before)


def build_screen(
    state: BrowseState,
    width: int,
    height: int,
    help_descriptions: Sequence[tuple[str, str]] = (),
    theme: UITheme = DEFAULT_THEME,
    home: Path | None = None,
) -> str:
    """Full ANSI payload for one repaint."""
    out: list[str] = ["\033[?25l\033[H"]
    rows = build_frame_rows(state, width, height, theme, home)
    for idx, row in enumerate(rows):
        out.append(f"\033[{idx + 1};1H{row}\033[K")
    if state.mode is Mode.PENDING_DELETE:
        out.append(delete_dialog(state, width, height, theme))
        return "".join(out)
    if state.mode is Mode.HELP:
        out.append(help_overlay(help_descriptions, width, height, theme))
        return "".join(out)
    row, col = cursor_position(state)
    out.append(f"\033[{row};{min(col, max(1, width - 1))}H\033[?25h")
    return "".join(out)


def draw_browser(
    fd: int,
    state: BrowseState,
    size: tuple[int, int],
    help_descriptions: Sequence[tuple[str, str]] = (),
    theme: UITheme = DEFAULT_THEME,
) -> None:
    """Paint ``state`` on ``fd`` at terminal ``size`` ``(columns, lines)``."""
    width, height = size
    payload = build_screen(state, width, height, help_descriptions, theme)
    os.write(fd, payload.encode("utf-8", errors="replace"))
