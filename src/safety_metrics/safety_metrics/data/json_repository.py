from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from ..common.coercion import as_str_id
from ..core.exceptions import DataSourceError
from .repository import Record

logger = logging.getLogger(__name__)

COLLECTIONS = ("empleados", "sucursales", "accidentes", "ausencias", "capacitaciones", "auditorias")


class JsonSnapshotRepository:
    """Reads a JSON export of the document store: one array per collection.

    The file is re-read whenever its modification time changes, so a fresh
    export is picked up on the next request.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
        self._cache: Optional[dict[str, list[Record]]] = None
        self._mtime: Optional[float] = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, list[Record]]:
        try:
            mtime = self._path.stat().st_mtime
        except OSError as e:
            raise DataSourceError(f"Snapshot no disponible: {self._path}") from e

        if self._cache is not None and mtime == self._mtime:
            return self._cache

        try:
            with self._path.open("r", encoding="utf-8") as fh:
                payload: Any = json.load(fh)
        except (OSError, ValueError) as e:
            raise DataSourceError(f"Snapshot ilegible: {self._path}") from e

        if not isinstance(payload, dict):
            raise DataSourceError(f"Snapshot sin colecciones: {self._path}")

        data: dict[str, list[Record]] = {}
        for name in COLLECTIONS:
            items = payload.get(name) or []
            if not isinstance(items, list):
                logger.warning("collection %s is not a list; ignored", name)
                items = []
            data[name] = [item for item in items if isinstance(item, dict)]

        logger.info(
            "snapshot loaded from %s (%s)",
            self._path,
            ", ".join(f"{name}={len(data[name])}" for name in COLLECTIONS),
        )
        self._cache, self._mtime = data, mtime
        return data

    def _list(self, collection: str, branch_id: Optional[str], *, key: str = "sucursalId") -> Sequence[Record]:
        items = self._load()[collection]
        if branch_id is None:
            return list(items)
        return [item for item in items if as_str_id(item.get(key)) == branch_id]

    def list_employees(self, branch_id: Optional[str] = None) -> Sequence[Record]:
        return self._list("empleados", branch_id)

    def list_branches(self, branch_id: Optional[str] = None) -> Sequence[Record]:
        return self._list("sucursales", branch_id, key="id")

    def list_accidents(self, branch_id: Optional[str] = None) -> Sequence[Record]:
        return self._list("accidentes", branch_id)

    def list_absences(self, branch_id: Optional[str] = None) -> Sequence[Record]:
        return self._list("ausencias", branch_id)

    def list_trainings(self, branch_id: Optional[str] = None) -> Sequence[Record]:
        return self._list("capacitaciones", branch_id)

    def list_audits(self, branch_id: Optional[str] = None) -> Sequence[Record]:
        return self._list("auditorias", branch_id)
