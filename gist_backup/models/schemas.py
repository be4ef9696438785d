"""Pydantic models for GitHub gist records."""

import copy
import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, HttpUrl, PrivateAttr, field_validator


class GistFile(BaseModel):
    """Represents a single file within a gist."""

    model_config = ConfigDict(extra="allow")

    filename: str
    type: str | None = None
    language: str | None = None
    raw_url: HttpUrl
    size: int = 0
    truncated: bool | None = None
    # Only populated by the single-gist endpoint, and only for small files.
    content: str | None = None


class GistOwner(BaseModel):
    """Simplified owner information."""

    model_config = ConfigDict(extra="allow")

    login: str
    id: int
    avatar_url: HttpUrl
    html_url: HttpUrl


class Gist(BaseModel):
    """Represents a GitHub Gist.

    Unknown keys from the API are kept so the record written to disk is the
    full response, not just the fields modelled here.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    url: HttpUrl
    html_url: HttpUrl
    description: str | None = None
    public: bool
    created_at: datetime
    updated_at: datetime
    comments: int = 0
    files: dict[str, GistFile] = {}
    owner: GistOwner | None = None
    truncated: bool = False

    @field_validator("id")
    @classmethod
    def id_is_path_segment(cls, value: str) -> str:
        """The id names a directory, so it must be a single path segment."""
        if not value or value in (".", "..") or "/" in value or "\\" in value:
            raise ValueError(f"gist id {value!r} is not a valid directory name")
        return value

    _source: dict[str, Any] | None = PrivateAttr(default=None)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Gist":
        """Validate an API record and keep it verbatim for metadata.json."""
        gist = cls.model_validate(data)
        gist._source = copy.deepcopy(data)
        return gist

    def metadata_json(self, indent: int = 2) -> str:
        """The record exactly as GitHub sent it, or the model dump if built locally."""
        if self._source is not None:
            record = self._source
        else:
            record = self.model_dump(mode="json")
        return json.dumps(record, indent=indent, ensure_ascii=False)
