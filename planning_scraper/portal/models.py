from dataclasses import dataclass


@dataclass(frozen=True)
class DocumentReference:
    """One row of the portal's file listing."""

    url: str
    title: str
    docid: str
