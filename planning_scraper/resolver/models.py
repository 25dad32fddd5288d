from dataclasses import dataclass


@dataclass(frozen=True)
class ResolvedDocument:
    """Verified payload of one document, ready to be persisted."""

    filename: str
    content: bytes
    content_type: str
    source_url: str = ""
    has_pdf_signature: bool = True

    @property
    def size_bytes(self) -> int:
        return len(self.content)
