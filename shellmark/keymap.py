"""Per-mode key binding tables.

A binding pairs a ``KeyCombo`` (a labelled matcher over key tokens that may
capture a payload) with a command factory. Bindings are evaluated in
registration order and the first match wins, so specific combos must be
registered before catch-all ones such as ``any_char()``.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

C = TypeVar("C")

_MATCHED = True


@dataclass(frozen=True)
class KeyCombo:
    """Key-token matcher with an optional human-readable label.

    ``match`` returns ``None`` for keys it does not accept and a payload
    otherwise.
    """

    match: Callable[[str], Any]
    label: str | None = None

    def __or__(self, other: KeyCombo) -> KeyCombo:
        def match_either(key: str) -> Any:
            payload = self.match(key)
            if payload is not None:
                return payload
            return other.match(key)

        labels = [label for label in (self.label, other.label) if label]
        return KeyCombo(match=match_either, label="/".join(labels) or None)


@dataclass(frozen=True)
class KeyBinding(Generic[C]):
    """Mapping from one combo to the command it produces."""

    combo: KeyCombo
    make_command: Callable[[Any], C]
    description: str | None = None

    def process(self, key: str) -> C | None:
        payload = self.combo.match(key)
        if payload is None:
            return None
        return self.make_command(payload)

    def describe(self) -> tuple[str, str] | None:
        if self.combo.label is None or self.description is None:
            return None
        return self.combo.label, self.description


class ModeKeymap(Generic[C]):
    """Ordered binding lists keyed by mode."""

    def __init__(self) -> None:
        self._bindings: dict[Hashable, list[KeyBinding[C]]] = {}

    def bind_with_input(
        self,
        mode: Hashable,
        combo: KeyCombo,
        make_command: Callable[[Any], C],
        description: str | None = None,
    ) -> ModeKeymap[C]:
        """Register a binding whose command is built from the combo payload."""
        self._bindings.setdefault(mode, []).append(
            KeyBinding(combo=combo, make_command=make_command, description=description)
        )
        return self

    def bind(
        self,
        mode: Hashable,
        combo: KeyCombo,
        command: C,
        description: str | None = None,
    ) -> ModeKeymap[C]:
        """Register a binding that always yields ``command``."""
        return self.bind_with_input(mode, combo, lambda _payload: command, description)

    def process(self, mode: Hashable, key: str) -> C | None:
        """Return the command of the first binding in ``mode`` matching ``key``."""
        for binding in self._bindings.get(mode, ()):
            command = binding.process(key)
            if command is not None:
                return command
        return None

    def descriptions(self, mode: Hashable) -> list[tuple[str, str]]:
        """``(combo, description)`` pairs for ``mode`` in registration order."""
        pairs: list[tuple[str, str]] = []
        for binding in self._bindings.get(mode, ()):
            described = binding.describe()
            if described is not None:
                pairs.append(described)
        return pairs

    def modes(self) -> list[Hashable]:
        return list(self._bindings)


def key(token: str, label: str | None = None) -> KeyCombo:
    """Combo matching exactly one key token."""
    return KeyCombo(
        match=lambda pressed: _MATCHED if pressed == token else None,
        label=label if label is not None else token,
    )


def char(ch: str) -> KeyCombo:
    """Combo matching one literal printable character."""
    return key(ch, ch)


def ctrl(letter: str) -> KeyCombo:
    """Combo matching ``Ctrl`` plus ``letter`` as decoded by ``shellmark.input``."""
    return key(f"CTRL_{letter.upper()}", f"C-{letter.lower()}")


def any_char() -> KeyCombo:
    """Combo matching any printable character, capturing it as the payload."""
    return KeyCombo(match=lambda pressed: pressed if len(pressed) == 1 and pressed.isprintable() else None)


def arrow_up() -> KeyCombo:
    return key("UP", "Up")


def arrow_down() -> KeyCombo:
    return key("DOWN", "Down")


def enter() -> KeyCombo:
    return key("ENTER", "Enter")


def tab() -> KeyCombo:
    return key("TAB", "Tab")


def backspace() -> KeyCombo:
    return key("BACKSPACE", "Backspace")


def ctrl_backspace() -> KeyCombo:
    return key("CTRL_BACKSPACE", "C-Backspace")


def esc() -> KeyCombo:
    return key("ESC", "Esc")


def f1() -> KeyCombo:
    return key("F1", "F1")
