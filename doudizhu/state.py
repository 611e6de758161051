"""Table state for a single Dou Dizhu deal."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .cards import Card, sort_cards
from .classify import classify
from .plays import Play
from .rules import Deal, IllegalPlay, beats, hand_without


class Phase(str, Enum):
    """High-level phases of a deal."""

    BIDDING = "bidding"
    PLAYING = "playing"
    COMPLETE = "complete"


@dataclass(slots=True)
class SeatState:
    """Cards and role tracked for each seat."""

    hand: List[Card] = field(default_factory=list)
    is_landlord: bool = False


@dataclass(frozen=True, slots=True)
class TurnRecord:
    """One executed turn; ``play`` is ``None`` for a pass."""

    seat: int
    play: Play | None


@dataclass(slots=True)
class TableState:
    """Mutable deal state driven by the orchestration loop."""

    seats: List[SeatState]
    landlord_cards: tuple[Card, ...] = ()
    landlord_seat: int | None = None
    current_seat: int = 0
    last_play: Play | None = None
    last_player_seat: int | None = None
    pass_count: int = 0
    bomb_count: int = 0
    history: List[TurnRecord] = field(default_factory=list)
    winner_seat: int | None = None
    phase: Phase = Phase.BIDDING

    @property
    def num_seats(self) -> int:
        return len(self.seats)

    @property
    def multiplier(self) -> int:
        return 2**self.bomb_count

    def hand_sizes(self) -> list[int]:
        return [len(seat.hand) for seat in self.seats]

    def outstanding_for(self, seat: int) -> Play | None:
        """Return the play ``seat`` must beat, or ``None`` when it leads."""

        if self.last_play is None or self.last_player_seat == seat:
            return None
        return self.last_play

    def assign_landlord(self, seat: int) -> None:
        """Hand the landlord cards to ``seat`` and open play with it."""

        if self.phase is not Phase.BIDDING:
            raise RuntimeError("landlord already assigned")
        self.landlord_seat = seat
        self.seats[seat].is_landlord = True
        self.seats[seat].hand = sort_cards([*self.seats[seat].hand, *self.landlord_cards])
        self.current_seat = seat
        self.phase = Phase.PLAYING

    def apply_play(self, seat: int, play: Play) -> None:
        """Execute ``play`` for ``seat``, raising :class:`IllegalPlay` if it is not legal."""

        self._require_turn(seat)
        actual = classify(play.cards)
        if actual is None:
            raise IllegalPlay(f"{play.describe()} is not a legal combination")
        if (actual.shape, actual.main_rank, actual.length) != (play.shape, play.main_rank, play.length):
            raise IllegalPlay(f"{play.describe()} does not match its cards ({actual.describe()})")
        outstanding = self.outstanding_for(seat)
        if outstanding is not None and not beats(play, outstanding):
            raise IllegalPlay(f"{play.describe()} does not beat {outstanding.describe()}")

        self.seats[seat].hand = hand_without(self.seats[seat].hand, play)
        if play.is_bomb_like:
            self.bomb_count += 1
        self.last_play = play
        self.last_player_seat = seat
        self.pass_count = 0
        self.history.append(TurnRecord(seat=seat, play=play))

        if not self.seats[seat].hand:
            self.winner_seat = seat
            self.phase = Phase.COMPLETE
            return
        self._advance()

    def apply_pass(self, seat: int) -> None:
        """Record a pass; two passes in a row clear the table for the next leader."""

        self._require_turn(seat)
        if self.outstanding_for(seat) is None:
            raise IllegalPlay(f"seat {seat} must lead and cannot pass")
        self.pass_count += 1
        self.history.append(TurnRecord(seat=seat, play=None))
        if self.pass_count >= self.num_seats - 1:
            self.last_play = None
            self.pass_count = 0
        self._advance()

    def _require_turn(self, seat: int) -> None:
        if self.phase is not Phase.PLAYING:
            raise IllegalPlay(f"cannot act during the {self.phase.value} phase")
        if seat != self.current_seat:
            raise IllegalPlay(f"seat {seat} acted out of turn (seat {self.current_seat} to act)")

    def _advance(self) -> None:
        self.current_seat = (self.current_seat + 1) % self.num_seats


def new_table(dealt: Deal) -> TableState:
    """Return a table in the bidding phase for ``dealt``."""

    return TableState(
        seats=[SeatState(hand=list(hand)) for hand in dealt.hands],
        landlord_cards=dealt.landlord_cards,
    )
