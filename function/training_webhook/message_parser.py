"""Parsing of free-text workout logs into training sessions.

A message looks like this::

    胸の日
    ベンチプレス 50kg 10回
    ダンベルフライ　12Kg　15回

The first line is the training type, lines 2-5 hold up to four exercises.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple

SLOT_COUNT = 4

# ASCII whitespace that can appear inside a line plus the full-width space
SPACE_CHARS = frozenset(" \t\f\v\u3000")
DIGITS = frozenset("0123456789")
REPS_MARKER = "回"

_LINE_BREAKS = re.compile(r"[\r\n]+")


@dataclass(frozen=True)
class TrainingEntry:
    """One exercise line: menu name, weight in kg and repetitions."""

    menu: Optional[str] = None
    weight: Optional[int] = None
    reps: Optional[int] = None

    def normalized(self) -> "TrainingEntry":
        """Return the entry as it is submitted: zero counts as no value."""
        return TrainingEntry(
            menu=self.menu or "",
            weight=self.weight or None,
            reps=self.reps or None,
        )


@dataclass(frozen=True)
class TrainingSession:
    training_type: str
    workout_date: date
    entries: Tuple[TrainingEntry, ...]


def split_lines(text: str) -> List[str]:
    """Split a message on any run of CR/LF characters."""
    stripped = text.strip()
    if not stripped:
        return []
    return _LINE_BREAKS.split(stripped)


def _take_digits(text: str) -> Tuple[str, Optional[int]]:
    """Cut a trailing run of ASCII digits off ``text``."""
    end = len(text)
    start = end
    while start > 0 and text[start - 1] in DIGITS:
        start -= 1
    if start == end:
        return text, None
    return text[:start], int(text[start:end])


def _take_spaces(text: str) -> Tuple[str, int]:
    """Cut a trailing run of spaces off ``text`` and return how many there were."""
    end = len(text)
    while end > 0 and text[end - 1] in SPACE_CHARS:
        end -= 1
    return text[:end], len(text) - end


def parse_training_line(line: str) -> TrainingEntry:
    """
    Parse one exercise line of the form ``<name> <weight>kg <reps>回``.

    Name, weight and reps are separated by runs of ASCII or full-width spaces,
    the unit is case-insensitive and the whole line has to match. Anything
    else gives an entry with all fields unset.

    Args:
        line: A single line without line breaks

    Returns:
        TrainingEntry with the parsed values or an empty entry
    """
    if not line.endswith(REPS_MARKER):
        return TrainingEntry()
    rest = line[:-len(REPS_MARKER)]

    rest, reps = _take_digits(rest)
    if reps is None:
        return TrainingEntry()

    rest, spaces = _take_spaces(rest)
    if not spaces:
        return TrainingEntry()

    if len(rest) < 2 or rest[-2] not in "kK" or rest[-1] not in "gG":
        return TrainingEntry()
    rest = rest[:-2]

    rest, weight = _take_digits(rest)
    if weight is None:
        return TrainingEntry()

    # The name needs at least one character of its own before the separator
    name, spaces = _take_spaces(rest)
    if not spaces or len(rest) < 2:
        return TrainingEntry()

    return TrainingEntry(menu=name.strip(), weight=weight, reps=reps)


def parse_message(
    text: str,
    workout_date: Optional[date] = None,
    logger: Optional[logging.Logger] = None,
) -> TrainingSession:
    """
    Turn a raw chat message into a TrainingSession with exactly four slots.

    Missing or unparseable lines become empty slots; this function never
    raises on user input.
    """
    logger = logger or logging.getLogger(__name__)
    lines = split_lines(text)

    training_type = lines[0].strip() if lines else ""

    entries = []
    for slot in range(1, SLOT_COUNT + 1):
        line = lines[slot] if slot < len(lines) else ""
        entry = parse_training_line(line)
        if line and entry.menu is None:
            logger.debug(f"Line {slot + 1} did not match the training format: {line}")
        entries.append(entry.normalized())

    if len(lines) > SLOT_COUNT + 1:
        logger.debug(f"Ignoring {len(lines) - SLOT_COUNT - 1} lines beyond slot {SLOT_COUNT}")

    return TrainingSession(
        training_type=training_type,
        workout_date=workout_date or date.today(),
        entries=tuple(entries),
    )
