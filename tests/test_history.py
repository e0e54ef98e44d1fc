from imagedeskew.core.geometry import Rect, Size
from imagedeskew.core.history import HistoryLog, Snapshot


def _snap(index: int) -> Snapshot:
    return Snapshot(1.0, Size(index, 0), Rect(index, index, 50, 50))


def test_empty_log_cannot_undo_or_redo():
    log = HistoryLog()

    assert not log.can_undo
    assert not log.can_redo
    assert log.current is None
    assert log.undo() is None
    assert log.redo() is None


def test_initial_snapshot_cannot_be_undone():
    log = HistoryLog()
    log.push(_snap(0))

    assert not log.can_undo
    assert log.current == _snap(0)


def test_undo_then_redo_restores_states():
    log = HistoryLog()
    for index in range(3):
        log.push(_snap(index))

    assert log.undo() == _snap(1)
    assert log.undo() == _snap(0)
    assert not log.can_undo
    assert log.can_redo

    assert log.redo() == _snap(1)
    assert log.redo() == _snap(2)
    assert not log.can_redo


def test_push_after_undo_discards_redo_branch():
    log = HistoryLog()
    for index in range(3):
        log.push(_snap(index))
    log.undo()

    log.push(_snap(9))

    assert not log.can_redo
    assert log.entries == (_snap(0), _snap(1), _snap(9))
    assert log.cursor == 3


def test_limit_drops_oldest_entries():
    log = HistoryLog(limit=3)
    for index in range(5):
        log.push(_snap(index))

    assert len(log) == 3
    assert log.entries[0] == _snap(2)
    assert log.current == _snap(4)


def test_clear_resets_cursor():
    log = HistoryLog()
    log.push(_snap(0))
    log.push(_snap(1))

    log.clear()

    assert len(log) == 0
    assert log.cursor == 0
