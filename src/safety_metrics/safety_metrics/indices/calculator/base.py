from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import IndexInputs, IndexSet


class IndexCalculator(ABC):
    """Calculator interface (Strategy Pattern for safety indices)."""

    @abstractmethod
    def calculate(self, inputs: IndexInputs) -> IndexSet:
        raise NotImplementedError
