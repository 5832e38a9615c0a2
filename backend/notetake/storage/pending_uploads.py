from notetake.storage.kv_store import JsonFileStore

PENDING_UPLOADS_KEY = "tempUploads"


class PendingUploads:
    """public_ids uploaded during an edit that has not been saved yet.

    Persisted so that a session interrupted by a reload can still be cleaned
    up the next time an editor mounts.
    """

    def __init__(self, store: JsonFileStore):
        self.store = store

    def list(self) -> list[str]:
        return list(self.store.get(PENDING_UPLOADS_KEY, []))

    def add(self, public_id: str) -> None:
        self.store.set(PENDING_UPLOADS_KEY, self.list() + [public_id])

    def discard(self, public_id: str) -> None:
        ids = self.list()
        if public_id not in ids:
            return
        remaining = [p for p in ids if p != public_id]
        if remaining:
            self.store.set(PENDING_UPLOADS_KEY, remaining)
        else:
            self.clear()

    def clear(self) -> None:
        self.store.remove(PENDING_UPLOADS_KEY)

    def __bool__(self) -> bool:
        return bool(self.list())
