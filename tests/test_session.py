"""
test_session.py — Tests for the report session context.

Tests cover:
    - Gating flags for generate / export / email
    - Generation replaces the previous dataset
    - Export uses the live selection, even after it changes
    - CSV download to disk
    - Seeding from config
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from report_builder.exceptions import ConfigError, EmptyDatasetError
from report_builder.selection import SelectionSet
from report_builder.session import ReportSession


@pytest.fixture
def session(rng):
    return ReportSession(rng=rng)


class TestGating:
    """Availability of the Preview / Download / Email actions."""

    def test_fresh_session_cannot_generate_or_export(self, session):
        assert not session.can_generate
        assert not session.can_export
        assert session.dataset.is_empty()

    def test_selection_enables_generate(self, session):
        session.toggle("score")
        assert session.can_generate
        assert not session.can_export

    def test_generation_enables_export(self, session):
        session.toggle("score")
        session.generate()
        assert session.can_export

    def test_email_is_never_available(self, session):
        session.toggle("score")
        session.generate()
        assert session.can_email is False


class TestActions:
    """Toggle, generate and export through the session."""

    def test_toggle_updates_selection(self, session):
        assert session.toggle("attempts") == SelectionSet(("attempts",))
        assert session.toggle("attempts").is_empty()

    def test_toggle_unknown_id_is_ignored(self, session):
        session.toggle("score")
        session.toggle("revenue")
        assert list(session.selection) == ["score"]

    def test_generate_with_empty_selection_is_allowed(self, session):
        dataset = session.generate()
        assert len(dataset) == 5
        assert all(row.keys() == ("date",) for row in dataset)

    def test_generate_replaces_previous_dataset(self, session):
        session.toggle("score")
        first = session.generate()
        session.toggle("timeSpent")
        second = session.generate()
        assert session.dataset is second
        assert second is not first
        assert len(second) == 5
        assert set(second[0].keys()) == {"date", "score", "timeSpent"}

    def test_export_before_generate_raises(self, session):
        session.toggle("score")
        with pytest.raises(EmptyDatasetError):
            session.export_csv()

    def test_export_empty_selection_dataset(self, session):
        session.generate()
        assert session.export_csv().split("\n")[0] == "date"

    def test_export_uses_live_selection(self, session):
        session.toggle("score")
        session.generate()
        session.toggle("attempts")
        lines = session.export_csv().split("\n")
        assert lines[0] == "date,score,attempts"
        assert all(line.endswith(",") for line in lines[1:])

    def test_export_after_deselect_drops_column(self, session):
        session.toggle("score")
        session.toggle("timeSpent")
        session.generate()
        session.toggle("score")
        lines = session.export_csv().split("\n")
        assert lines[0] == "date,timeSpent"
        assert all(line.count(",") == 1 for line in lines)

    def test_download_csv(self, session, tmp_path):
        session.toggle("completionStatus")
        session.generate()
        path = session.download_csv(tmp_path)
        assert path == tmp_path / "custom-report.csv"
        assert path.read_text(encoding="utf-8") == session.export_csv()


class TestFromConfig:
    """Session construction from configuration."""

    def test_seeded_sessions_generate_identical_data(self):
        cfg = {"data_generation": {"seed": 99}}
        a = ReportSession.from_config(cfg)
        b = ReportSession.from_config(cfg)
        for s in (a, b):
            s.toggle("score")
            s.toggle("loginStatus")
            s.generate()
        assert a.export_csv() == b.export_csv()

    def test_missing_generation_section_is_unseeded(self):
        session = ReportSession.from_config({})
        session.toggle("score")
        assert len(session.generate()) == 5

    def test_string_seed_is_coerced(self):
        a = ReportSession.from_config({"data_generation": {"seed": "42"}})
        b = ReportSession.from_config({"data_generation": {"seed": 42}})
        for s in (a, b):
            s.toggle("score")
            s.generate()
        assert a.export_csv() == b.export_csv()

    @pytest.mark.parametrize("seed", ["abc", 1.5, True, -1])
    def test_invalid_seed_raises_config_error(self, seed):
        with pytest.raises(ConfigError, match="seed"):
            ReportSession.from_config({"data_generation": {"seed": seed}})

    def test_empty_generation_section_is_unseeded(self):
        session = ReportSession.from_config({"data_generation": None})
        session.toggle("score")
        assert len(session.generate()) == 5
