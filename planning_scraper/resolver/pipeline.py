from abc import ABC, abstractmethod
from dataclasses import dataclass

from planning_scraper.portal.models import DocumentReference


@dataclass(slots=True)
class ResolutionContext:
    reference: DocumentReference
    index: int
    filename: str
    pdf_url: str = ""
    final_url: str = ""
    payload: bytes | None = None
    content_type: str = ""
    has_pdf_signature: bool = True


class ResolutionStep(ABC):
    @abstractmethod
    def run(self, context: ResolutionContext) -> ResolutionContext:
        raise NotImplementedError
