"""City autocomplete selection state machine.

The suggestion list of one input field is modelled as two immutable states,
`Closed` and `Open`, and a pure `transition(state, event)` function. Input
devices are reduced to event objects, so keyboard/pointer/focus sequences can
be replayed deterministically.

Closing hides the list but keeps `candidates` and `active_index`; the next
`TextChanged`, `UniverseReplaced` or commit recomputes them. Consumers read
`visible_candidates`, which is empty while closed.

`CityAutocomplete` wraps the machine for one field: it holds the current
state, forwards events, and writes committed places back to its owner.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional, Sequence, Tuple, Union

from app.cities.matching import DEFAULT_LIMIT, rank_cities

logger = logging.getLogger(__name__)


# --- States ---

@dataclass(frozen=True)
class Closed:
    query: str = ""
    candidates: Tuple[str, ...] = ()
    active_index: int = -1

    is_open = False


@dataclass(frozen=True)
class Open:
    query: str = ""
    candidates: Tuple[str, ...] = ()
    active_index: int = -1

    is_open = True


SelectionState = Union[Closed, Open]


# --- Events ---

@dataclass(frozen=True)
class TextChanged:
    text: str


@dataclass(frozen=True)
class UniverseReplaced:
    """The place list changed underneath the field (e.g. metadata arrived)."""


@dataclass(frozen=True)
class FocusGained:
    pass


@dataclass(frozen=True)
class FocusLostOutside:
    pass


@dataclass(frozen=True)
class KeyArrowDown:
    pass


@dataclass(frozen=True)
class KeyArrowUp:
    pass


@dataclass(frozen=True)
class KeyEscape:
    pass


@dataclass(frozen=True)
class KeyEnter:
    pass


@dataclass(frozen=True)
class PointerEnterCandidate:
    index: int


@dataclass(frozen=True)
class PointerCommitCandidate:
    index: int


Event = Union[
    TextChanged,
    UniverseReplaced,
    FocusGained,
    FocusLostOutside,
    KeyArrowDown,
    KeyArrowUp,
    KeyEscape,
    KeyEnter,
    PointerEnterCandidate,
    PointerCommitCandidate,
]


@dataclass(frozen=True)
class Transition:
    state: SelectionState
    commit: Optional[str] = None


def _valid(index: int, candidates: Sequence[str]) -> bool:
    return 0 <= index < len(candidates)


def _recomputed(query: str, universe: Sequence[str], limit: int) -> Tuple[Tuple[str, ...], int]:
    candidates = tuple(rank_cities(universe, query, limit))
    return candidates, (0 if candidates else -1)


def _committed(place: str, universe: Sequence[str], limit: int) -> Transition:
    # The field now holds `place`; keep the hidden list consistent with it.
    candidates, active = _recomputed(place, universe, limit)
    return Transition(Closed(query=place, candidates=candidates, active_index=active), commit=place)


def transition(
    state: SelectionState,
    event: Event,
    universe: Sequence[str] = (),
    limit: int = DEFAULT_LIMIT,
) -> Transition:
    """Apply one event. Never raises; unknown or inapplicable events are no-ops."""
    count = len(state.candidates)

    if isinstance(event, TextChanged):
        candidates, active = _recomputed(event.text, universe, limit)
        return Transition(Open(query=event.text, candidates=candidates, active_index=active))

    if isinstance(event, UniverseReplaced):
        candidates, active = _recomputed(state.query, universe, limit)
        return Transition(replace(state, candidates=candidates, active_index=active))

    if isinstance(event, FocusGained):
        return Transition(Open(state.query, state.candidates, state.active_index))

    if isinstance(event, FocusLostOutside):
        return Transition(Closed(state.query, state.candidates, state.active_index))

    if isinstance(event, PointerCommitCandidate):
        # Accepted while closed too: a pointer commit must survive a close
        # that was delivered ahead of it.
        if _valid(event.index, state.candidates):
            return _committed(state.candidates[event.index], universe, limit)
        return Transition(state)

    if isinstance(event, PointerEnterCandidate):
        if _valid(event.index, state.candidates):
            return Transition(replace(state, active_index=event.index))
        return Transition(state)

    if not state.is_open:
        if isinstance(event, (KeyArrowDown, KeyArrowUp)):
            return Transition(Open(state.query, state.candidates, state.active_index))
        return Transition(state)

    if isinstance(event, KeyArrowDown):
        if count == 0:
            return Transition(state)
        return Transition(replace(state, active_index=(state.active_index + 1) % count))

    if isinstance(event, KeyArrowUp):
        if count == 0:
            return Transition(state)
        if state.active_index < 0:
            return Transition(replace(state, active_index=count - 1))
        return Transition(replace(state, active_index=(state.active_index - 1 + count) % count))

    if isinstance(event, KeyEscape):
        return Transition(Closed(state.query, state.candidates, state.active_index))

    if isinstance(event, KeyEnter):
        if _valid(state.active_index, state.candidates):
            return _committed(state.candidates[state.active_index], universe, limit)
        return Transition(state)

    return Transition(state)


class CityAutocomplete:
    """Suggestion list for a single city field."""

    def __init__(
        self,
        universe: Callable[[], Sequence[str]],
        on_change: Optional[Callable[[str], None]] = None,
        on_commit: Optional[Callable[[str], None]] = None,
        limit: int = DEFAULT_LIMIT,
        text: str = "",
    ):
        self._universe = universe
        self._on_change = on_change
        self._on_commit = on_commit
        self.limit = limit
        self.state: SelectionState = Closed(query=text)

    @property
    def text(self) -> str:
        return self.state.query

    @property
    def is_open(self) -> bool:
        return self.state.is_open

    @property
    def active_index(self) -> int:
        return self.state.active_index if self.state.is_open else -1

    @property
    def visible_candidates(self) -> Tuple[str, ...]:
        return self.state.candidates if self.state.is_open else ()

    def dispatch(self, event: Event) -> Optional[str]:
        """Process one event; returns the committed place, if any."""
        result = transition(self.state, event, self._universe(), self.limit)
        self.state = result.state

        if isinstance(event, TextChanged) and self._on_change:
            self._on_change(event.text)
        if result.commit is not None:
            logger.debug(f"Committed city {result.commit!r}")
            if self._on_commit:
                self._on_commit(result.commit)
        return result.commit

    def set_text(self, text: str) -> None:
        """Programmatic update (swap, presets): no list opening, no callbacks."""
        candidates, active = _recomputed(text, self._universe(), self.limit)
        self.state = Closed(query=text, candidates=candidates, active_index=active)

    # Convenience wrappers mirroring the input device vocabulary.

    def type(self, text: str) -> None:
        self.dispatch(TextChanged(text))

    def focus(self) -> None:
        self.dispatch(FocusGained())

    def blur_outside(self) -> None:
        self.dispatch(FocusLostOutside())

    def key(self, name: str) -> Optional[str]:
        events = {
            "ArrowDown": KeyArrowDown(),
            "ArrowUp": KeyArrowUp(),
            "Escape": KeyEscape(),
            "Enter": KeyEnter(),
        }
        event = events.get(name)
        if event is None:
            return None
        return self.dispatch(event)

    def hover(self, index: int) -> None:
        self.dispatch(PointerEnterCandidate(index))

    def click(self, index: int) -> Optional[str]:
        return self.dispatch(PointerCommitCandidate(index))

    def refresh(self) -> None:
        self.dispatch(UniverseReplaced())
