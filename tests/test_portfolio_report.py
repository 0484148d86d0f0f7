"""Tests for scripts/portfolio_report.py — JSON snapshot loading and CLI output."""
import json
import sys

import pytest

from scripts.portfolio_report import load_snapshot, main


HOLDINGS = [
    {"symbol": "TCS", "name": "Tata Consultancy Services Ltd.", "price": 3500,
     "changePercent": 1.2, "shares": 10, "sector": "Technology", "type": "Common Stock"},
    {"symbol": "SBIN", "name": "State Bank of India", "price": 800,
     "changePercent": -0.6, "shares": 50, "sector": "Finance", "type": "Common Stock"},
]


@pytest.fixture
def holdings_file(tmp_path):
    path = tmp_path / "holdings.json"
    path.write_text(json.dumps(HOLDINGS), encoding="utf-8")
    return path


class TestLoadSnapshot:
    def test_list_format(self, holdings_file):
        snapshot = load_snapshot(holdings_file)
        assert [h.symbol for h in snapshot] == ["TCS", "SBIN"]
        assert snapshot[1].change_percent == -0.6

    def test_wrapped_format(self, tmp_path):
        path = tmp_path / "wrapped.json"
        path.write_text(json.dumps({"holdings": HOLDINGS}), encoding="utf-8")
        assert len(load_snapshot(path)) == 2


class TestMain:
    def test_prints_report(self, holdings_file, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", [
            "portfolio_report.py", str(holdings_file),
            "--window", "1W", "--select", "tcs", "--seed", "1", "--invested", "70000",
        ])
        main()
        out = capsys.readouterr().out
        assert "# Portfolio Dashboard" in out
        assert "## TCS (1W)" in out
        assert "**Active Holdings**: 2" in out

    def test_missing_file_exits(self, tmp_path, monkeypatch):
        monkeypatch.setattr(sys, "argv", ["portfolio_report.py", str(tmp_path / "none.json")])
        with pytest.raises(SystemExit) as exc:
            main()
        assert exc.value.code == 1

    def test_invalid_holding_exits(self, tmp_path, monkeypatch):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps([{"symbol": "BAD", "price": 10, "shares": 0}]), encoding="utf-8")
        monkeypatch.setattr(sys, "argv", ["portfolio_report.py", str(path)])
        with pytest.raises(SystemExit):
            main()
