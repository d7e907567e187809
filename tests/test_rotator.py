"""Tests for the rotator."""

import os
from datetime import datetime, timedelta

import pytest

from rotlog.errors import IOFailure
from rotlog.rotator import RotationPolicy, Rotator

FMT = "app-%Y%m%d-%H%M%S.log"


class FakeClock:
    def __init__(self):
        self.now = datetime(2025, 1, 15, 12, 0, 0)

    def __call__(self):
        current = self.now
        self.now += timedelta(seconds=1)
        return current


def _rotator(tmp_path, max_size_kb=1, max_backups=3):
    policy = RotationPolicy(
        path=str(tmp_path),
        filename_format=FMT,
        max_size_kb=max_size_kb,
        max_backups=max_backups,
    )
    return Rotator(policy, time_func=FakeClock())


class TestLatestOrCreate:
    def test_empty_directory_creates_file(self, tmp_path):
        rotator = _rotator(tmp_path)
        fh = rotator.latest_or_create()
        fh.close()
        assert os.listdir(tmp_path) == ["app-20250115-120000.log"]
        assert len(rotator.files()) == 1

    def test_reuses_newest_existing_file(self, tmp_path):
        (tmp_path / "app-20250101-000000.log").write_text("old\n")
        (tmp_path / "app-20250102-000000.log").write_text("newer\n")
        rotator = _rotator(tmp_path)

        fh = rotator.latest_or_create()
        fh.write(b"appended\n")
        fh.close()

        assert (tmp_path / "app-20250102-000000.log").read_text() == "newer\nappended\n"
        assert len(os.listdir(tmp_path)) == 2

    def test_recreates_deleted_newest_file(self, tmp_path):
        rotator = _rotator(tmp_path)
        rotator.latest_or_create().close()
        path = rotator.files()[-1]
        os.remove(path)

        fh = rotator.latest_or_create()
        fh.close()
        assert os.path.exists(path)


class TestOversized:
    def test_threshold_is_inclusive(self, tmp_path):
        rotator = _rotator(tmp_path, max_size_kb=1)
        fh = rotator.latest_or_create()
        fh.write(b"x" * 1023)
        fh.flush()
        assert rotator.oversized(fh) is False
        fh.write(b"x")
        fh.flush()
        assert rotator.oversized(fh) is True
        fh.close()

    def test_integer_kilobytes(self, tmp_path):
        rotator = _rotator(tmp_path, max_size_kb=2)
        fh = rotator.latest_or_create()
        fh.write(b"x" * 2047)
        fh.flush()
        assert rotator.oversized(fh) is False
        fh.close()

    def test_closed_handle_raises(self, tmp_path):
        rotator = _rotator(tmp_path)
        fh = rotator.latest_or_create()
        fh.close()
        with pytest.raises(IOFailure):
            rotator.oversized(fh)


class TestRotate:
    def test_rotate_closes_old_and_creates_new(self, tmp_path):
        rotator = _rotator(tmp_path)
        old = rotator.latest_or_create()
        new = rotator.rotate(old)

        assert old.closed
        assert not new.closed
        assert new.name == rotator.files()[-1]
        assert len(rotator.files()) == 2
        new.close()

    def test_count_grows_until_cap(self, tmp_path):
        rotator = _rotator(tmp_path, max_backups=3)
        fh = rotator.latest_or_create()
        for expected in (2, 3, 3, 3):
            before = len(rotator.files())
            fh = rotator.rotate(fh)
            assert len(os.listdir(tmp_path)) == min(before + 1, 3) == expected
        fh.close()

    def test_retention_keeps_most_recent(self, tmp_path):
        rotator = _rotator(tmp_path, max_backups=3)
        fh = rotator.latest_or_create()
        created = [os.path.basename(fh.name)]
        for _ in range(6):
            fh = rotator.rotate(fh)
            created.append(os.path.basename(fh.name))
        fh.close()

        assert sorted(os.listdir(tmp_path)) == created[-3:]
        assert [os.path.basename(p) for p in rotator.files()] == created[-3:]

    def test_single_file_cap(self, tmp_path):
        rotator = _rotator(tmp_path, max_backups=1)
        fh = rotator.latest_or_create()
        fh = rotator.rotate(fh)
        fh = rotator.rotate(fh)
        fh.close()
        assert len(os.listdir(tmp_path)) == 1

    def test_rotate_ignores_close_errors(self, tmp_path):
        rotator = _rotator(tmp_path)

        class BrokenHandle:
            def close(self):
                raise OSError("already gone")

        fh = rotator.rotate(BrokenHandle())
        assert len(rotator.files()) == 1
        fh.close()


class TestClean:
    def test_clean_enforces_cap_and_is_idempotent(self, tmp_path):
        for day in range(1, 6):
            (tmp_path / f"app-202501{day:02d}-000000.log").write_text("")
        rotator = _rotator(tmp_path, max_backups=2)

        deleted = rotator.clean()
        assert deleted == ["app-20250101-000000.log", "app-20250102-000000.log",
                           "app-20250103-000000.log"]
        assert rotator.clean() == []
        assert sorted(os.listdir(tmp_path)) == [
            "app-20250104-000000.log", "app-20250105-000000.log",
        ]


class TestTail:
    def test_tail_spans_rotated_files(self, tmp_path):
        rotator = _rotator(tmp_path, max_backups=5)
        fh = rotator.latest_or_create()
        fh.write(b"one\ntwo\n")
        fh = rotator.rotate(fh)
        fh.write(b"three\n")
        fh.close()

        assert rotator.tail(2) == ["two", "three"]
        assert rotator.tail(10) == ["one", "two", "three"]
