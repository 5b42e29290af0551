from abc import ABC, abstractmethod

from jobradar.models import CandidateRecord


class CandidateSource(ABC):
    name: str = "unknown"

    @abstractmethod
    def fetch(self, keywords: list[str], limit: int = 30) -> list[CandidateRecord]:
        pass
