import shutil

from photo_grouper.models import MoveReport
from photo_grouper.organization.mover import FileMover


def test_move_creates_folder_and_overwrites(tmp_path):
    src = tmp_path / "IMG_0001.JPG"
    src.write_text("new")
    dest_dir = tmp_path / "JPG"
    dest_dir.mkdir()
    (dest_dir / "IMG_0001.JPG").write_text("old")
    report = MoveReport()

    assert FileMover().move(src, dest_dir, report)

    assert not src.exists()
    assert (dest_dir / "IMG_0001.JPG").read_text() == "new"
    assert report.moved == 1


def test_copy_keeps_source(tmp_path):
    src = tmp_path / "a.jpg"
    src.write_text("content")
    report = MoveReport()

    FileMover().copy(src, tmp_path / "backup" / "sub", report)

    assert src.exists()
    assert (tmp_path / "backup" / "sub" / "a.jpg").read_text() == "content"


def test_failure_is_recorded_not_raised(tmp_path, monkeypatch):
    src = tmp_path / "a.jpg"
    src.write_text("content")

    def boom(s, d):
        raise OSError("cross-device link")

    monkeypatch.setattr(shutil, "move", boom)
    report = MoveReport()

    assert not FileMover().move(src, tmp_path / "out", report)

    assert report.moved == 0
    assert not report.ok
    assert report.failures[0].source == src
    assert report.failures[0].destination == tmp_path / "out" / "a.jpg"
    assert "cross-device" in report.failures[0].error


def test_move_all_and_merge(tmp_path, make_files):
    files = make_files("a.mov", "b.mp4")
    report = MoveReport(moved=3)

    FileMover().move_all(files, tmp_path / "Videos", report)

    assert report.moved == 5
    assert sorted(p.name for p in (tmp_path / "Videos").iterdir()) == ["a.mov", "b.mp4"]
    assert MoveReport(moved=1).merge(report).moved == 6


def test_dry_run_touches_nothing(tmp_path, make_files):
    files = make_files("a.jpg")
    mover = FileMover(dry_run=True)
    report = MoveReport()

    mover.ensure_directory(tmp_path / "out")
    mover.move(files[0], tmp_path / "out", report)

    assert files[0].exists()
    assert not (tmp_path / "out").exists()
    assert report.moved == 1


def test_move_into_own_folder_keeps_file(tmp_path, make_files):
    src, = make_files("IMG_0001.JPG")
    report = MoveReport()

    assert FileMover().move(src, tmp_path, report)
    assert FileMover().copy(src, tmp_path, report)

    assert src.read_bytes() == b"data"
    assert report.moved == 0
    assert report.ok
