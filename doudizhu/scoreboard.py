"""Helpers for tracking results across a run of self-play deals."""

from __future__ import annotations

from dataclasses import dataclass, field

from .match import DealResult

__all__ = ["SeatTotal", "MatchHistory"]


@dataclass(frozen=True, slots=True)
class SeatTotal:
    """Aggregate results accumulated for one seat across all recorded deals."""

    seat: int
    landlord_deals: int
    landlord_wins: int
    farmer_wins: int
    points: int

    @property
    def wins(self) -> int:
        return self.landlord_wins + self.farmer_wins


@dataclass(slots=True)
class MatchHistory:
    """Mutable tracker that accumulates deal results for a match.

    Points follow the usual stake: the landlord wins or loses the multiplier
    against each farmer, so each farmer moves by one multiplier and the
    landlord by one per farmer.
    """

    num_seats: int
    deals: list[DealResult] = field(default_factory=list)
    _landlord_deals: list[int] = field(init=False, repr=False)
    _landlord_wins: list[int] = field(init=False, repr=False)
    _farmer_wins: list[int] = field(init=False, repr=False)
    _points: list[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.num_seats <= 1:
            raise ValueError("num_seats must be at least two")
        self._landlord_deals = [0 for _ in range(self.num_seats)]
        self._landlord_wins = [0 for _ in range(self.num_seats)]
        self._farmer_wins = [0 for _ in range(self.num_seats)]
        self._points = [0 for _ in range(self.num_seats)]

    def record(self, result: DealResult) -> None:
        """Record ``result`` and update cumulative totals."""

        for seat in (result.winner_seat, result.landlord_seat):
            if seat < 0 or seat >= self.num_seats:
                raise ValueError("seat index out of range")
        self.deals.append(result)

        landlord = result.landlord_seat
        stake = result.multiplier
        self._landlord_deals[landlord] += 1
        sign = 1 if result.landlord_won else -1
        if result.landlord_won:
            self._landlord_wins[landlord] += 1
        for seat in range(self.num_seats):
            if seat == landlord:
                self._points[seat] += sign * stake * (self.num_seats - 1)
                continue
            self._points[seat] -= sign * stake
            if not result.landlord_won:
                self._farmer_wins[seat] += 1

    def total_multiplier(self) -> int:
        return sum(result.multiplier for result in self.deals)

    def landlord_win_rate(self) -> float:
        if not self.deals:
            return 0.0
        return sum(1 for result in self.deals if result.landlord_won) / len(self.deals)

    def totals(self) -> list[SeatTotal]:
        """Return the cumulative totals for each seat in seating order."""

        return [
            SeatTotal(
                seat=idx,
                landlord_deals=self._landlord_deals[idx],
                landlord_wins=self._landlord_wins[idx],
                farmer_wins=self._farmer_wins[idx],
                points=self._points[idx],
            )
            for idx in range(self.num_seats)
        ]
