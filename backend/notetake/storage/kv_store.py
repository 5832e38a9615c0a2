import copy
import json
import os
from pathlib import Path
from typing import Any, Callable

Listener = Callable[[str, Any], None]


def _safe_key_path(base_dir: Path, key: str) -> Path:
    # keys become file names; keep them strict to avoid path issues
    if not key or any(ch in key for ch in ["/", "\\"]) or ".." in key:
        raise ValueError("Invalid storage key")
    return base_dir / f"{key}.json"


def _atomic_write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
        f.flush()
        os.fsync(f.fileno())
    tmp_path.replace(path)


class JsonFileStore:
    """Key/value store persisted as one JSON file per key.

    Values are cached in memory after the first read and every write replaces
    the whole value, so readers never see a partially updated collection.
    Listeners are told about every ``set``/``remove`` after the write lands.

    Two stores opened on the same directory behave like two browser tabs:
    each has its own cache and whichever writes last wins on disk.
    """

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir
        self._cache: dict[str, Any] = {}
        self._listeners: list[Listener] = []

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._cache:
            path = _safe_key_path(self.base_dir, key)
            if not path.exists():
                return copy.deepcopy(default)
            self._cache[key] = json.loads(path.read_text(encoding="utf-8"))
        return copy.deepcopy(self._cache[key])

    def set(self, key: str, value: Any) -> None:
        path = _safe_key_path(self.base_dir, key)
        _atomic_write_json(path, value)
        self._cache[key] = copy.deepcopy(value)
        self._notify(key, value)

    def remove(self, key: str) -> None:
        path = _safe_key_path(self.base_dir, key)
        existed = key in self._cache or path.exists()
        self._cache.pop(key, None)
        if not existed:
            return
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        self._notify(key, None)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, key: str, value: Any) -> None:
        for listener in list(self._listeners):
            listener(key, copy.deepcopy(value))
