from typing import Iterable

from notetake.core.records import ResolvedNote


def filter_notes(
    notes: Iterable[ResolvedNote],
    title: str = "",
    tag_ids: Iterable[str] = (),
) -> list[ResolvedNote]:
    """Notes whose title contains ``title`` (case-insensitive) and that carry every tag in ``tag_ids``."""
    needle = title.lower()
    wanted = list(tag_ids)
    out: list[ResolvedNote] = []
    for note in notes:
        if needle and needle not in note.title.lower():
            continue
        note_tag_ids = {t.id for t in note.tags}
        if any(tag_id not in note_tag_ids for tag_id in wanted):
            continue
        out.append(note)
    return out


def find_note(notes: Iterable[ResolvedNote], note_id: str) -> ResolvedNote | None:
    return next((n for n in notes if n.id == note_id), None)
