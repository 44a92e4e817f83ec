"""Tests for parsing sanitized model text into task results."""

from __future__ import annotations

import json

import pytest

from sharp_edge.errors import ParseError, SchemaError
from sharp_edge.extraction.parser import extract, parse_json
from sharp_edge.extraction.sanitize import sanitize
from sharp_edge.extraction.tasks import FairValueTask, OddsTask

ODDS = OddsTask()
FAIR_VALUE = FairValueTask()


def _row(**overrides) -> dict:
    row = {
        "playerName": "Gui Santos",
        "market": "Player Points",
        "direction": "Over",
        "line": 16.5,
        "bookOdds": 115,
        "fairOdds": 106,
        "book": "FanDuel",
        "ev": 4.6,
    }
    row.update(overrides)
    return row


class TestParseJson:
    def test_invalid_json(self):
        with pytest.raises(ParseError) as info:
            parse_json("{not json")
        assert "Failed to parse model response as JSON" in info.value.message
        assert info.value.text == "{not json"

    def test_parse_error_is_not_schema_error(self):
        with pytest.raises(ParseError) as info:
            parse_json("")
        assert not isinstance(info.value, SchemaError)


class TestOddsExtraction:
    def test_round_trip(self):
        reply = '```json\n{"book_name": "Circa", "market": "AL East 2026 Division Winner", "odds": {"New York Yankees": 150, "Boston Red Sox": -120}}\n```'
        result = extract(sanitize(reply), ODDS)
        assert result == {
            "book_name": "Circa",
            "market": "AL East 2026 Division Winner",
            "odds": {"New York Yankees": 150, "Boston Red Sox": -120},
        }

    def test_signed_string_odds_keep_sign(self):
        result = extract('{"book_name": "BetMGM", "market": "NL West", "odds": {"A": "+150", "B": "-110"}}', ODDS)
        assert result["odds"] == {"A": 150, "B": -110}

    def test_empty_odds_allowed(self):
        result = extract('{"book_name": "BetMGM", "market": "NL West", "odds": {}}', ODDS)
        assert result["odds"] == {}

    def test_missing_key(self):
        with pytest.raises(SchemaError) as info:
            extract('{"book_name": "BetMGM", "odds": {}}', ODDS)
        assert "market" in info.value.message

    def test_float_odds_rejected(self):
        with pytest.raises(SchemaError):
            extract('{"book_name": "X", "market": "Y", "odds": {"A": 1.5}}', ODDS)

    def test_array_rejected(self):
        with pytest.raises(SchemaError):
            extract("[]", ODDS)

    def test_schema_error_carries_text(self):
        text = '{"book_name": "X"}'
        with pytest.raises(SchemaError) as info:
            extract(text, ODDS)
        assert info.value.text == text


class TestFairValueExtraction:
    def test_row_count_matches(self):
        rows = [_row(), _row(playerName="Moses Moody", direction="Under", bookOdds=-130)]
        result = extract(json.dumps(rows), FAIR_VALUE)
        assert len(result) == 2
        assert result == rows

    def test_preserves_row_order(self):
        rows = [_row(playerName=name) for name in ("C", "A", "B")]
        result = extract(json.dumps(rows), FAIR_VALUE)
        assert [r["playerName"] for r in result] == ["C", "A", "B"]

    def test_integer_line_and_ev_stay_integers(self):
        result = extract(json.dumps([_row(line=16, ev=5)]), FAIR_VALUE)
        assert result[0]["line"] == 16
        assert isinstance(result[0]["line"], int)
        assert isinstance(result[0]["ev"], int)
        assert json.dumps(result[0]["line"]) == "16"

    def test_decimal_line_and_ev_kept(self):
        result = extract(json.dumps([_row(line=16.5, ev=4.6)]), FAIR_VALUE)
        assert result[0]["line"] == 16.5
        assert result[0]["ev"] == 4.6

    def test_empty_table(self):
        assert extract("[]", FAIR_VALUE) == []

    def test_bad_direction(self):
        with pytest.raises(SchemaError):
            extract(json.dumps([_row(direction="Push")]), FAIR_VALUE)

    def test_unknown_market(self):
        with pytest.raises(SchemaError):
            extract(json.dumps([_row(market="Player Dunks")]), FAIR_VALUE)

    def test_missing_field(self):
        row = _row()
        del row["fairOdds"]
        with pytest.raises(SchemaError) as info:
            extract(json.dumps([row]), FAIR_VALUE)
        assert "fairOdds" in info.value.message

    def test_object_rejected(self):
        with pytest.raises(SchemaError):
            extract(json.dumps(_row()), FAIR_VALUE)
