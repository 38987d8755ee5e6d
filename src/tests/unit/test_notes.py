"""Tests for note.core.notes module."""

from datetime import date

from note.core.notes import dated_filename, resolve_note

TODAY = date(2024, 4, 26)


class TestDatedFilename:
    """Tests for dated_filename()."""

    def test_appends_date(self):
        """The date stamp is appended before the suffix."""
        assert dated_filename("meeting", TODAY) == "meeting-20240426.md"

    def test_spaces_become_underscores(self):
        """Spaces in multi-word names are normalized."""
        assert dated_filename("daily standup", TODAY) == "daily_standup-20240426.md"


class TestResolveNote:
    """Tests for resolve_note()."""

    def test_explicit_md_name(self, notes_dir):
        """A name ending in .md is opened directly."""
        target = resolve_note(notes_dir, "ideas-20240101.md", TODAY)

        assert target.path == notes_dir / "ideas-20240101.md"
        assert target.exists is False

    def test_existing_exact_name(self, notes_dir, make_note):
        """An existing <name>.md is opened instead of creating a dated note."""
        make_note("existing-note-20240426.md")

        target = resolve_note(notes_dir, "existing-note-20240426", TODAY)

        assert target.path == notes_dir / "existing-note-20240426.md"
        assert target.exists is True

    def test_todays_note_reused(self, notes_dir, make_note):
        """Today's dated note is reopened."""
        make_note("meeting-20240426.md")

        target = resolve_note(notes_dir, "meeting", TODAY)

        assert target.exists is True
        assert target.similar == []

    def test_new_note_with_similar_hint(self, notes_dir, make_note):
        """A new note lists similar existing notes."""
        make_note("meeting-20240101.md")
        make_note("meeting-20240102.md")

        target = resolve_note(notes_dir, "meeting", TODAY)

        assert target.path == notes_dir / "meeting-20240426.md"
        assert target.exists is False
        assert target.similar == ["meeting-20240101.md", "meeting-20240102.md"]

    def test_too_many_similar_notes_not_listed(self, notes_dir, make_note):
        """More than five similar notes are not worth listing."""
        for day in range(1, 7):
            make_note(f"log-2024010{day}.md")

        target = resolve_note(notes_dir, "log", TODAY)

        assert target.similar == []
