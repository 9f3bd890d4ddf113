from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class DownloadFile(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(min_length=1)


class BuildDownloads(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    application: DownloadFile


class BuildEntry(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    build: StrictInt = Field(ge=0)
    downloads: BuildDownloads


class BuildsResponse(BaseModel):
    """Schema of `GET /projects/<project>/versions/<version>/builds`."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    builds: list[BuildEntry]


@dataclass(frozen=True, slots=True)
class BuildReference:
    version: str
    build_number: int
    download_name: str
