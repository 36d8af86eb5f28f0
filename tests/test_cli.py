"""Unit tests for the command-line entry point."""

from unittest.mock import MagicMock, patch

import pytest

from lsgl_tracker.store.cli import main, parse_args
from lsgl_tracker.store.sources.base import Dataset, SourceError

ROWS = {
    Dataset.ARRIVALS: [{"ICAO24": "abc123", "departure_airport_ICAO": "LSGG", "arrival_date": "2024-01-10"}],
    Dataset.DEPARTURES: [{"ICAO24": "abc123", "destination_airport_ICAO": "LSZB", "departure_date": "2024-01-09"}],
    Dataset.ARRIVAL_STATE_VECTORS: [],
    Dataset.DEPARTURE_STATE_VECTORS: [],
    Dataset.AIRCRAFT_METADATA: [],
    Dataset.AIRPORT_METADATA: [],
}


def _source(fail: bool = False) -> MagicMock:
    source = MagicMock()
    if fail:
        source.fetch_rows.side_effect = SourceError("offline")
    else:
        source.fetch_rows.side_effect = lambda dataset: ROWS[dataset]
    return source


class TestParseArgs:
    """Tests for parse_args."""

    def test_defaults(self) -> None:
        """With no arguments the window is the last seven days."""
        args = parse_args([])
        assert args.days == 7
        assert args.start is None
        assert args.counts is False

    def test_range(self) -> None:
        args = parse_args(["--start", "2024-01-01", "--end", "2024-01-31", "-c"])
        assert args.start == "2024-01-01"
        assert args.end == "2024-01-31"
        assert args.counts is True


class TestMain:
    """Tests for main with a mocked source."""

    @patch("lsgl_tracker.store.cli.GitHubCsvSource")
    def test_prints_daily_counts(self, mock_cls: MagicMock, capsys: pytest.CaptureFixture) -> None:
        mock_cls.return_value = _source()

        main(["--start", "2024-01-08", "--end", "2024-01-10", "--counts"])

        out = capsys.readouterr().out
        assert "2024-01-09" in out
        assert "2024-01-10" in out
        assert "arrivals" in out

    @patch("lsgl_tracker.store.cli.GitHubCsvSource")
    def test_writes_csv(self, mock_cls: MagicMock, tmp_path) -> None:
        """Test writing the flight list to a CSV file with --output."""
        mock_cls.return_value = _source()
        output = tmp_path / "flights.csv"

        main(["--start", "2024-01-01", "--end", "2024-01-31", "-o", str(output)])

        content = output.read_text()
        assert "abc123" in content
        assert content.count("\n") == 3

    @patch("lsgl_tracker.store.cli.GitHubCsvSource")
    def test_total_load_failure_exits(self, mock_cls: MagicMock, capsys: pytest.CaptureFixture) -> None:
        """Exit with status 1 when no dataset could be loaded."""
        mock_cls.return_value = _source(fail=True)

        with pytest.raises(SystemExit) as exc:
            main([])

        assert exc.value.code == 1
        assert "Failed to load flight data" in capsys.readouterr().err

    def test_start_without_end_exits(self) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["--start", "2024-01-01"])
        assert exc.value.code == 1

    def test_bad_date_exits(self) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["--start", "2024-01-01", "--end", "January"])
        assert exc.value.code == 1
