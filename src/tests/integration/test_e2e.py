"""End-to-end tests over a real SQLite database."""

from datetime import date, datetime

from daynotes import build_notebook, search
from daynotes.core.search import highlight


def test_roadmap_scenario(db_path, scheduler):
    """Notes written on two days are found newest first with highlights."""
    notebook = build_notebook(db_path=db_path, scheduler=scheduler)
    try:
        notebook.save(date(2024, 3, 5), "Met with team about roadmap")
        notebook.save(date(2024, 3, 6), "Roadmap review continued")

        results = search("roadmap", notebook.store.enumerate())

        assert [r.key for r in results] == ["2024-03-06", "2024-03-05"]
        newest, older = results
        assert [newest.excerpt[s:e] for s, e in newest.highlight_spans] == ["Roadmap"]
        assert [older.excerpt[s:e] for s, e in older.highlight_spans] == ["roadmap"]
        assert highlight(older.excerpt, older.highlight_spans) == (
            "Met with team about [roadmap]"
        )
        assert newest.source_char_count == 24
    finally:
        notebook.close()


def test_editing_session_survives_restart(db_path, scheduler):
    """Auto-saved and explicitly saved notes persist across restarts."""
    notebook = build_notebook(db_path=db_path, scheduler=scheduler)
    notebook.edit(datetime(2024, 3, 5, 9, 0), "first draft")
    notebook.edit(datetime(2024, 3, 5, 9, 0), "second draft")
    scheduler.advance(1.0)
    notebook.save(date(2024, 3, 6), "explicit")
    notebook.close()

    reopened = build_notebook(db_path=db_path, scheduler=scheduler)
    try:
        assert reopened.load(date(2024, 3, 5)) == "second draft"
        assert reopened.load(date(2024, 3, 6)) == "explicit"
        assert reopened.summary().total_entries == 2
        assert reopened.month(2024, 3) == [5, 6]
    finally:
        reopened.close()


def test_foreign_data_coexists(db_path, scheduler):
    """Other keys in the shared table never leak into notes."""
    notebook = build_notebook(db_path=db_path, scheduler=scheduler)
    try:
        notebook.store.put_raw("theme", "dark roadmap")
        notebook.store.put_raw("monitor-note-corrupted", "roadmap")
        notebook.save(date(2024, 3, 5), "roadmap")

        assert [r.key for r in notebook.search("roadmap")] == ["2024-03-05"]
        assert notebook.summary().total_entries == 1
    finally:
        notebook.close()
