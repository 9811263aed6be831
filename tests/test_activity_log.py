from datetime import datetime, timedelta, timezone

from vault_commander.tui.activity_log import ActivityLog, format_timestamp


def _clock(start):
    t = [start]

    def now():
        value = t[0]
        t[0] = value + timedelta(seconds=1)
        return value

    return now


def test_format_timestamp_uses_twelve_hour_clock():
    t = datetime(2024, 3, 5, 14, 7, 9, tzinfo=timezone.utc)
    assert format_timestamp(t) == "2024-03-05 2:07:09pm (UTC)"


def test_format_timestamp_midnight_is_twelve():
    t = datetime(2024, 3, 5, 0, 0, 1, tzinfo=timezone.utc)
    assert format_timestamp(t).startswith("2024-03-05 12:00:01am")


def test_log_is_append_only_and_newest_last():
    log = ActivityLog(clock=_clock(datetime(2024, 1, 1, 9, 0, 0, tzinfo=timezone.utc)))
    log.append("first")
    log.append("second")
    assert log.messages == ["first", "second"]
    assert len(log) == 2
    lines = log.lines()
    assert lines[0].endswith("first")
    assert lines[-1].startswith("2024-01-01 9:00:01am")
    assert lines[-1].endswith("second")


def test_entries_are_a_copy():
    log = ActivityLog()
    log.append("x")
    log.entries.clear()
    assert len(log) == 1
