"""Instruction text sent alongside each screenshot."""

from __future__ import annotations

from sharp_edge.extraction.base import TaskKind
from sharp_edge.extraction.models import FAIR_VALUE_MARKETS

ODDS_PROMPT = """Analyze this sportsbook screenshot and extract ALL odds shown.{hint}

Return ONLY valid JSON (no markdown, no backticks):
{{
  "book_name": "name of sportsbook (e.g. Circa, FanDuel, DraftKings, BetMGM, Bet365, etc.)",
  "market": "market description (e.g. AL East 2026 Division Winner)",
  "odds": {{
    "Full Team Name": american_odds_integer,
    "Full Team Name 2": american_odds_integer
  }}
}}

Rules:
- Use FULL team names (e.g. "New York Yankees" not just "Yankees")
- American odds as integers (+185 → 185, -150 → -150)
- If multiple markets/divisions visible, include ALL teams from ALL visible markets in a single odds object
- Include partially visible teams too
- Identify the sportsbook from logos, branding, colors, or UI elements"""

FAIR_VALUE_PROMPT = """Extract every row from this betting fair value table as JSON. Return ONLY a JSON array, no markdown, no backticks, no explanation.

Each element should be:
{{"playerName":"Full Name","market":"{markets}","direction":"Over","line":number,"bookOdds":number,"fairOdds":number,"book":"book name","ev":number}}

Parsing rules:
- The "bet_name" column has format like "Gui Santos Over 16.5" → playerName:"Gui Santos", direction:"Over", line:16.5
- direction is exactly "Over" or "Under"
- The "odds" column has format like "+115 / nan" or "+115 / -145" → take the FIRST number as bookOdds
- The "avg_fv" column has the fair value odds in American format like "+106" or "-120" → use as fairOdds
- The "market" column says "Player Points", "Player Rebounds", etc → use as market
- The "book" column has the sportsbook name → use as book
- The "ev" column has the EV percentage like "4.6%" → parse as number 4.6
- The "fbc" column has a decimal like "6.1%" → you can ignore this
- Include ALL rows visible in the image, in table order
- American odds as integers (+115 → 115, -130 → -130)"""


def book_hint_clause(book_hint: str | None) -> str:
    if not book_hint:
        return ""
    return f" The sportsbook is likely: {book_hint}."


def build_prompt(kind: TaskKind, book_hint: str | None = None) -> str:
    """Return the instruction text for a task kind.

    The book hint only applies to odds boards; it is ignored for fair-value
    tables.
    """
    if kind is TaskKind.ODDS:
        return ODDS_PROMPT.format(hint=book_hint_clause(book_hint))
    if kind is TaskKind.FAIR_VALUE:
        return FAIR_VALUE_PROMPT.format(markets=" or ".join(FAIR_VALUE_MARKETS))
    raise ValueError(f"Unknown task kind: {kind!r}")
