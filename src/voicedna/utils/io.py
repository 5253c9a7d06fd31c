"""File I/O: atomic replace-on-write, JSON documents and YAML settings."""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import IO, Any, Callable, TypeVar

from pydantic import BaseModel
from ruamel.yaml import YAML

M = TypeVar("M", bound=BaseModel)

_yaml = YAML()
_yaml.default_flow_style = False


def write_atomic(path: Path | str, write: Callable[[IO[str]], None]) -> None:
    """Write through a temp file in the target directory, then replace.

    Readers see either the previous document or the new one, never a
    partial write.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode="w",
        dir=path.parent,
        prefix=f".{path.stem}-",
        suffix=".tmp",
        delete=False,
        encoding="utf-8",
    ) as tmp:
        tmp_path = Path(tmp.name)
        try:
            write(tmp)
        except BaseException:
            tmp.close()
            tmp_path.unlink(missing_ok=True)
            raise

    tmp_path.replace(path)


def read_json(path: Path | str) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def write_json(path: Path | str, data: Any) -> None:
    write_atomic(path, lambda f: json.dump(data, f, indent=2, ensure_ascii=False))


def read_yaml(path: Path | str) -> dict:
    """Read a YAML mapping; an empty file reads as ``{}``."""
    with open(path, encoding="utf-8") as f:
        return dict(_yaml.load(f) or {})


def write_yaml(path: Path | str, data: dict) -> None:
    write_atomic(path, lambda f: _yaml.dump(data, f))


def load_model(path: Path | str, model: type[M]) -> M | None:
    """Validate a JSON document into ``model``; None when the file is missing."""
    path = Path(path)
    if not path.exists():
        return None
    return model.model_validate(read_json(path))


def dump_model(path: Path | str, instance: BaseModel) -> None:
    write_json(path, instance.model_dump(mode="json"))
