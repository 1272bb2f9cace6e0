from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

Record = Mapping[str, Any]


class SafetyDataRepository(Protocol):
    """Fetch-layer boundary: raw store records, optionally scoped to one branch."""

    def list_employees(self, branch_id: Optional[str] = None) -> Sequence[Record]:
        raise NotImplementedError

    def list_branches(self, branch_id: Optional[str] = None) -> Sequence[Record]:
        raise NotImplementedError

    def list_accidents(self, branch_id: Optional[str] = None) -> Sequence[Record]:
        raise NotImplementedError

    def list_absences(self, branch_id: Optional[str] = None) -> Sequence[Record]:
        raise NotImplementedError

    def list_trainings(self, branch_id: Optional[str] = None) -> Sequence[Record]:
        raise NotImplementedError

    def list_audits(self, branch_id: Optional[str] = None) -> Sequence[Record]:
        raise NotImplementedError
