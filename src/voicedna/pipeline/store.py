"""Profile persistence — one JSON document per user, replaced whole."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Protocol

from voicedna.models.record import ProfileRecord
from voicedna.utils.io import dump_model, load_model

_USER_ID = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.@-]*$")


class ProfileStore(Protocol):
    """Protocol for profile persistence backends."""

    def load(self, user_id: str) -> ProfileRecord | None: ...
    def save(self, record: ProfileRecord) -> None: ...
    def list_user_ids(self) -> list[str]: ...


class JsonProfileStore:
    """File-backed store: ``<root>/profiles/<user_id>.json``.

    Every save is a whole-record atomic replace. There is no cross-process
    locking; concurrent writers for the same user must be serialized by the
    caller.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)
        self.profiles_dir = self.root / "profiles"

    def _path(self, user_id: str) -> Path:
        if not _USER_ID.match(user_id) or ".." in user_id:
            raise ValueError(f"Invalid user id: {user_id!r}")
        return self.profiles_dir / f"{user_id}.json"

    def load(self, user_id: str) -> ProfileRecord | None:
        return load_model(self._path(user_id), ProfileRecord)

    def save(self, record: ProfileRecord) -> None:
        dump_model(self._path(record.user_id), record)

    def list_user_ids(self) -> list[str]:
        if not self.profiles_dir.exists():
            return []
        return sorted(p.stem for p in self.profiles_dir.glob("*.json"))
