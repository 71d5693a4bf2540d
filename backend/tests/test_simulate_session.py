"""Session simulation script tests."""
import csv
from pathlib import Path

import pytest

from scripts.simulate_session import generate_csv, main, run_simulation


class TestRunSimulation:
    def test_balance_ledger(self):
        stats = run_simulation(spins=3, bet=100, columns=5, rows=5, fps=60, balance=50000)
        assert stats.spins == 3
        assert stats.total_debited == 300
        assert stats.end_balance == 49700
        assert [r.balance_after for r in stats.records] == [49900, 49800, 49700]

    def test_stop_times_staggered(self):
        stats = run_simulation(spins=1, bet=5, columns=4, rows=3, fps=60, balance=100)
        record = stats.records[0]
        assert len(record.stop_times) == 4
        assert all(a < b for a, b in zip(record.stop_times, record.stop_times[1:]))

    def test_stops_when_funds_run_out(self):
        stats = run_simulation(spins=10, bet=100, columns=3, rows=3, fps=30, balance=250)
        assert stats.spins == 2
        assert stats.rejected_insufficient_funds is True
        assert stats.end_balance == 50


class TestCsv:
    def test_generate_csv(self, tmp_path: Path):
        stats = run_simulation(spins=2, bet=10, columns=3, rows=3, fps=30, balance=1000)
        out = tmp_path / "session.csv"
        generate_csv(stats, str(out), fps=30)
        with open(out) as f:
            rows = list(csv.DictReader(f))
        assert [row["balance_after"] for row in rows] == ["990", "980"]
        assert len(rows[0]["stop_times"].split(";")) == 3
        assert len(rows[0]["config_hash"]) == 16

    def test_main_returns_zero(self, tmp_path: Path, capsys: pytest.CaptureFixture):
        code = main(["--spins", "2", "--bet", "5", "--out", str(tmp_path / "s.csv")])
        assert code == 0
        assert "Total debited: 10" in capsys.readouterr().out

    @pytest.mark.parametrize(
        "flag,value,code",
        [
            ("--columns", "9", "INVALID_GEOMETRY"),
            ("--rows", "2", "INVALID_GEOMETRY"),
            ("--bet", "7", "INVALID_DENOMINATION"),
        ],
    )
    def test_main_rejects_out_of_set_options(
        self, flag: str, value: str, code: str, capsys: pytest.CaptureFixture
    ):
        with pytest.raises(SystemExit) as exc_info:
            main(["--spins", "1", flag, value])
        assert exc_info.value.code == 2
        assert code in capsys.readouterr().err
