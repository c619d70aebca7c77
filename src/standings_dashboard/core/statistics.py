"""
Typed accessors for the statistics a team series can plot.

Each Statistic carries one or more StatField resolvers. A resolver pulls a
scalar out of a TeamRecord and returns None when the payload does not carry
it, so series builders can drop the point instead of plotting a false zero.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from .models import TeamRecord

Scalar = Union[int, float]


def _parse_pct(text: Optional[str]) -> Optional[float]:
    # The API formats percentages as ".580" / "1.000", and "-.--" before opening day
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _parse_rank(text: Optional[str]) -> Optional[int]:
    if text is None or not text.strip().isdigit():
        return None
    return int(text)


def _wins(record: TeamRecord) -> Optional[Scalar]:
    return record.wins


def _losses(record: TeamRecord) -> Optional[Scalar]:
    return record.losses


def _win_percentage(record: TeamRecord) -> Optional[Scalar]:
    if record.league_record is not None:
        pct = _parse_pct(record.league_record.pct)
        if pct is not None:
            return pct
    return _parse_pct(record.winning_percentage)


def _run_differential(record: TeamRecord) -> Optional[Scalar]:
    return record.run_differential


def _division_rank(record: TeamRecord) -> Optional[Scalar]:
    return _parse_rank(record.division_rank)


def _split_value(split_type: str, attr: str) -> Callable[[TeamRecord], Optional[Scalar]]:
    def resolve(record: TeamRecord) -> Optional[Scalar]:
        if record.records is None:
            return None
        split = record.records.split(split_type)
        if split is None:
            return None
        return getattr(split, attr)

    return resolve


@dataclass(frozen=True)
class StatField:
    """One plottable series: a label plus the resolver that extracts it."""

    label: str
    resolve: Callable[[TeamRecord], Optional[Scalar]]


class Statistic(str, Enum):
    """Statistics selectable for a team series."""

    WINS = "wins"
    LOSSES = "losses"
    WIN_PERCENTAGE = "winningPercentage"
    RUN_DIFFERENTIAL = "runDifferential"
    DIVISION_RANK = "divisionRank"
    HOME_WINS = "homeWins"
    AWAY_WINS = "awayWins"
    HOME_LOSSES = "homeLosses"
    AWAY_LOSSES = "awayLosses"
    HOME_VS_AWAY_WINS = "homeVsAwayWins"

    @property
    def label(self) -> str:
        return STATISTIC_LABELS[self]

    @property
    def fields(self) -> tuple[StatField, ...]:
        return STATISTIC_FIELDS[self]

    @property
    def is_split(self) -> bool:
        return len(self.fields) > 1


STATISTIC_LABELS: dict[Statistic, str] = {
    Statistic.WINS: "Wins",
    Statistic.LOSSES: "Losses",
    Statistic.WIN_PERCENTAGE: "Win Percentage",
    Statistic.RUN_DIFFERENTIAL: "Run Differential",
    Statistic.DIVISION_RANK: "Division Rank",
    Statistic.HOME_WINS: "Home Wins",
    Statistic.AWAY_WINS: "Away Wins",
    Statistic.HOME_LOSSES: "Home Losses",
    Statistic.AWAY_LOSSES: "Away Losses",
    Statistic.HOME_VS_AWAY_WINS: "Home vs Away Wins",
}

STATISTIC_FIELDS: dict[Statistic, tuple[StatField, ...]] = {
    Statistic.WINS: (StatField("value", _wins),),
    Statistic.LOSSES: (StatField("value", _losses),),
    Statistic.WIN_PERCENTAGE: (StatField("value", _win_percentage),),
    Statistic.RUN_DIFFERENTIAL: (StatField("value", _run_differential),),
    Statistic.DIVISION_RANK: (StatField("value", _division_rank),),
    Statistic.HOME_WINS: (StatField("value", _split_value("home", "wins")),),
    Statistic.AWAY_WINS: (StatField("value", _split_value("away", "wins")),),
    Statistic.HOME_LOSSES: (StatField("value", _split_value("home", "losses")),),
    Statistic.AWAY_LOSSES: (StatField("value", _split_value("away", "losses")),),
    Statistic.HOME_VS_AWAY_WINS: (
        StatField("home", _split_value("home", "wins")),
        StatField("away", _split_value("away", "wins")),
    ),
}
