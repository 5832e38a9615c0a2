from notetake.core.records import NoteData, Tag


def test_add_allows_duplicate_labels(tags):
    tags.add(Tag(id="t1", label="work"))
    tags.add(Tag(id="t2", label="work"))
    assert [t.id for t in tags.list_tags()] == ["t1", "t2"]


def test_create_generates_fresh_ids(tags):
    a = tags.create("ideas")
    b = tags.create("ideas")
    assert a.id != b.id
    assert tags.get(a.id) == a


def test_update_renames_only_the_matching_tag(tags):
    tags.add(Tag(id="t1", label="work"))
    tags.add(Tag(id="t2", label="home"))

    tags.update("t1", "job")

    assert tags.list_tags() == [Tag(id="t1", label="job"), Tag(id="t2", label="home")]


def test_update_and_remove_unknown_id_are_noops(tags, store):
    tags.add(Tag(id="t1", label="work"))
    writes = []
    store.subscribe(lambda key, value: writes.append(key))

    tags.update("missing", "x")
    tags.remove("missing")

    assert writes == []
    assert tags.list_tags() == [Tag(id="t1", label="work")]


def test_rename_is_visible_in_resolved_notes_without_touching_tag_ids(tags, notes):
    tag = tags.add(Tag(id="t1", label="work"))
    created = notes.create(NoteData(title="A", markdown="hello", tags=(tag,)))

    tags.update("t1", "job")

    resolved = notes.get(created.id)
    assert resolved.tags == (Tag(id="t1", label="job"),)
    assert notes.list_raw()[0].tag_ids == ("t1",)


def test_remove_keeps_notes_and_drops_tag_from_view(tags, notes):
    keep = tags.add(Tag(id="t1", label="keep"))
    gone = tags.add(Tag(id="t2", label="gone"))
    created = notes.create(NoteData(title="A", markdown="hello", tags=(keep, gone)))

    tags.remove("t2")

    assert len(notes.list_raw()) == 1
    # the stored note still carries the dangling id
    assert notes.list_raw()[0].tag_ids == ("t1", "t2")
    assert notes.get(created.id).tags == (keep,)
