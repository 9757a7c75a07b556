import json

from src.tango.history import MAX_HISTORY_ITEMS, SolveHistory
from src.tango.model import CellValue


def test_missing_file_starts_empty(tmp_path):
    history = SolveHistory(tmp_path / "history.json")
    assert history.items == []


def test_add_prepends_and_persists(tmp_path, checkerboard):
    path = tmp_path / "history.json"
    history = SolveHistory(path)
    first = history.add(checkerboard, 1.5)
    second = history.add(checkerboard, 2.5)

    assert [item.id for item in history.items] == [second.id, first.id]
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload[0]["id"] == second.id
    assert payload[0]["duration"] == 2.5
    assert payload[0]["grid"]["cells"][0][0] == "SUN"

    reloaded = SolveHistory(path)
    assert [item.id for item in reloaded.items] == [second.id, first.id]
    assert reloaded.items[0].grid == checkerboard


def test_history_keeps_only_latest_entries(tmp_path, checkerboard):
    history = SolveHistory(tmp_path / "history.json")
    ids = [history.add(checkerboard, float(i)).id for i in range(MAX_HISTORY_ITEMS + 5)]
    assert len(history.items) == MAX_HISTORY_ITEMS
    assert history.items[0].id == ids[-1]
    assert history.items[-1].id == ids[5]


def test_added_grid_is_a_snapshot(tmp_path, checkerboard):
    history = SolveHistory(tmp_path / "history.json")
    item = history.add(checkerboard, 0.1)
    checkerboard.cells[0][0] = CellValue.EMPTY
    assert item.grid.cells[0][0] == CellValue.SUN


def test_delete_and_clear(tmp_path, checkerboard):
    path = tmp_path / "history.json"
    history = SolveHistory(path)
    keep = history.add(checkerboard, 1.0)
    drop = history.add(checkerboard, 2.0)

    assert history.delete(drop.id)
    assert not history.delete("no-such-id")
    assert [item.id for item in SolveHistory(path).items] == [keep.id]

    history.clear()
    assert history.items == []
    assert not path.exists()


def test_unreadable_file_starts_empty_with_warning(tmp_path, checkerboard, capsys):
    path = tmp_path / "history.json"
    path.write_text("{not json", encoding="utf-8")

    history = SolveHistory(path)
    assert history.items == []
    assert "Warning" in capsys.readouterr().out

    history.add(checkerboard, 1.0)
    assert len(SolveHistory(path).items) == 1
