"""
Tests for attendance recording and derived reports.
"""

import datetime

import pytest

from domain.errors import NotFoundError, ValidationError
from repositories.player_repository import PlayerRepository
from repositories.sqlite_store import SqliteStore
from services.attendance_service import AttendanceService

TODAY = datetime.date(2026, 10, 19)


@pytest.fixture
def player_repo(tmp_path):
    return PlayerRepository(SqliteStore(str(tmp_path / "test_attendance.db")))


@pytest.fixture
def attendance(player_repo):
    return AttendanceService(player_repo, today_provider=lambda: TODAY)


@pytest.fixture
def player(player_repo):
    return player_repo.add("Alice", today=TODAY)


class TestSetAttendance:
    def test_records_today_by_default(self, attendance, player):
        updated = attendance.set_attendance(player.id, "Absent")

        assert updated.attendance_history == {"2026-10-19": "Absent"}
        assert updated.attendance_status == "Absent"
        assert updated.last_seen == "2026-10-19"

    def test_later_write_wins(self, attendance, player):
        attendance.set_attendance(player.id, "Absent", "2026-10-12")
        attendance.set_attendance(player.id, "Present", datetime.date(2026, 10, 12))

        assert player.attendance_history == {"2026-10-12": "Present"}

    def test_persists_history(self, attendance, player, player_repo):
        attendance.set_attendance(player.id, "Present", "2026-10-05")

        reloaded = PlayerRepository(player_repo.store)
        reloaded.load()
        stored = reloaded.get_by_id(player.id)
        assert stored.attendance_history == {"2026-10-05": "Present"}
        assert stored.last_seen == "2026-10-05"

    def test_unknown_player(self, attendance):
        with pytest.raises(NotFoundError):
            attendance.set_attendance("missing", "Present")

    @pytest.mark.parametrize("status", ["Future", "No Data", "present", ""])
    def test_rejects_derived_or_unknown_status(self, attendance, player, status):
        with pytest.raises(ValidationError) as exc_info:
            attendance.set_attendance(player.id, status)
        assert exc_info.value.reason == ValidationError.INVALID_STATUS

    def test_rejects_bad_date(self, attendance, player):
        with pytest.raises(ValidationError) as exc_info:
            attendance.set_attendance(player.id, "Present", "19/10/2026")
        assert exc_info.value.reason == ValidationError.INVALID_DATE


class TestMonthlyReport:
    def test_future_month_is_all_future(self, attendance, player):
        report = attendance.monthly_report(player.id, 2026, 10)

        assert len(report) == 30
        assert {entry["status"] for entry in report} == {"Future"}
        assert report[0]["date"] == "2026-11-01"
        assert report[-1]["date"] == "2026-11-30"

    def test_current_month_uses_status_for_today_only(self, attendance, player):
        assert player.attendance_history == {}

        report = {e["date"]: e["status"] for e in attendance.monthly_report(player.id, 2026, 9)}

        assert len(report) == 31
        assert report["2026-10-19"] == "Present"
        assert all(report[f"2026-10-{d:02d}"] == "No Data" for d in range(1, 19))
        assert all(report[f"2026-10-{d:02d}"] == "Future" for d in range(20, 32))

    def test_recorded_history_shows_up(self, attendance, player):
        attendance.set_attendance(player.id, "Absent", "2026-10-03")
        attendance.set_attendance(player.id, "Present", "2026-10-10")

        report = {e["date"]: e["status"] for e in attendance.monthly_report(player.id, 2026, 9)}

        assert report["2026-10-03"] == "Absent"
        assert report["2026-10-10"] == "Present"
        assert report["2026-10-04"] == "No Data"
        # attendance_status now reflects the latest write (Present)
        assert report["2026-10-19"] == "Present"

    def test_february_leap_year(self, attendance, player):
        assert len(attendance.monthly_report(player.id, 2028, 1)) == 29

    def test_month_index_zero_is_january(self, attendance, player):
        report = attendance.monthly_report(player.id, 2026, 0)

        assert len(report) == 31
        assert report[0]["date"] == "2026-01-01"
        assert report[-1]["date"] == "2026-01-31"
        assert {entry["status"] for entry in report} == {"No Data"}

    @pytest.mark.parametrize("month_index", [-1, 12, "june", None])
    def test_rejects_out_of_range_month(self, attendance, player, month_index):
        with pytest.raises(ValidationError) as exc_info:
            attendance.monthly_report(player.id, 2026, month_index)
        assert exc_info.value.reason == ValidationError.INVALID_DATE

    def test_unknown_player_is_empty(self, attendance):
        assert attendance.monthly_report("missing", 2026, 9) == []


class TestRecentHistory:
    def test_covers_window_through_today(self, attendance, player):
        attendance.set_attendance(player.id, "Absent", "2026-10-01")

        history = attendance.recent_history(player.id, days=30)

        assert len(history) == 31
        assert history[0]["date"] == "2026-09-19"
        assert history[-1] == {"date": "2026-10-19", "status": "Absent"}
        assert {"date": "2026-10-01", "status": "Absent"} in history


def test_present_on(attendance, player_repo, player):
    bob = player_repo.add("Bob", today=TODAY)
    attendance.set_attendance(player.id, "Present", "2026-10-15")
    attendance.set_attendance(bob.id, "Absent", "2026-10-15")

    assert [p.name for p in attendance.present_on("2026-10-15")] == ["Alice"]
