# site_cache/crawler/models.py
"""
Data models for the SiteCache crawler: a cached Page and its owning Site.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from site_cache.errors import JsonError
from site_cache.utils import extract_domain


class Page(BaseModel):
    """A fetched or cache-loaded HTTP resource.

    ``content`` lives in memory only; the metadata record written next to
    the body file holds every other field.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    url: str
    domain: str
    status: int = Field(..., ge=100, le=999)
    content_type: Optional[str] = None
    etag: Optional[str] = None
    last_modified: Optional[str] = None
    len: int = Field(..., ge=0)
    content: str = Field("", exclude=True)

    @model_validator(mode="after")
    def _check_domain(self) -> Page:
        derived = extract_domain(self.url)
        if derived != self.domain:
            raise ValueError(f"domain {self.domain!r} does not match url host ({derived!r})")
        return self

    def metadata_json(self) -> str:
        """Serialises the metadata record (everything except ``content``)."""
        return self.model_dump_json()

    @classmethod
    def from_metadata(cls, metadata: str, content: str) -> Page:
        """Rebuilds a Page from a metadata record and the cached body text."""
        try:
            return cls.model_validate_json(metadata).model_copy(update={"content": content})
        except ValidationError as exc:
            raise JsonError(f"Invalid page metadata: {exc}") from exc


@dataclass(slots=True)
class Site:
    """Pages grouped under one registrable domain."""

    domain: str
    pages: List[Page] = field(default_factory=list)
