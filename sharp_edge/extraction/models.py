"""Pydantic models for extraction results."""

from __future__ import annotations

from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator

FairValueMarket = Literal[
    "Player Points",
    "Player Rebounds",
    "Player Assists",
    "Player Threes",
    "Player Steals",
    "Player Blocks",
]

FAIR_VALUE_MARKETS: tuple[str, ...] = get_args(FairValueMarket)


def _american_odds(value: Any) -> Any:
    """Accept "+150" / "-110" style strings; leave everything else to the model."""
    if isinstance(value, str):
        text = value.strip()
        digits = text[1:] if text[:1] in "+-" else text
        if digits.isdigit():
            return int(text)
    return value


class OddsSnapshot(BaseModel):
    book_name: str
    market: str
    odds: dict[str, StrictInt]

    @field_validator("odds", mode="before")
    @classmethod
    def _coerce_odds(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return {name: _american_odds(price) for name, price in v.items()}
        return v


class FairValueRow(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    player_name: str = Field(alias="playerName")
    market: FairValueMarket
    direction: Literal["Over", "Under"]
    line: int | float
    book_odds: StrictInt = Field(alias="bookOdds")
    fair_odds: StrictInt = Field(alias="fairOdds")
    book: str
    ev: int | float

    @field_validator("book_odds", "fair_odds", mode="before")
    @classmethod
    def _coerce_american(cls, v: Any) -> Any:
        return _american_odds(v)
