"""
Typed schemas for Elsevier Scopus API responses.

The Scopus JSON uses prefixed keys (``dc:title``, ``prism:issn``,
``@ref``) and is loose about shapes: a single subject area or link may
arrive as an object instead of a one-element list, and metrics may be
strings, numbers or missing. These models pin every field down with an
explicit default so the fetcher never reaches into raw dictionaries.

Defaults for optional fields:
    publisher             -> "Unknown"
    CiteScore, SJR        -> absent (reported as 0 / "N/A")
    subject areas, links  -> []
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_list(v: Any) -> Any:
    if v is None:
        return []
    if isinstance(v, dict):
        return [v]
    return v


def _as_optional_float(v: Any) -> Optional[float]:
    if v is None or v == "":
        return None
    try:
        return float(v)
    except (TypeError, ValueError):
        return None


class _ScopusModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SearchEntry(_ScopusModel):
    """One document hit from ``/search/scopus``."""

    issn: Optional[str] = Field(default=None, alias="prism:issn")
    eissn: Optional[str] = Field(default=None, alias="prism:eIssn")
    publication_name: Optional[str] = Field(default=None, alias="prism:publicationName")

    @property
    def identifier(self) -> Optional[str]:
        """ISSN of the source journal, falling back to the electronic ISSN."""
        return (self.issn or "").strip() or (self.eissn or "").strip() or None


class SearchResults(_ScopusModel):
    total_results: Optional[int] = Field(default=None, alias="opensearch:totalResults")
    entry: List[SearchEntry] = Field(default_factory=list)

    @field_validator("entry", mode="before")
    @classmethod
    def coerce_entry(cls, v: Any) -> Any:
        return _as_list(v)


class SearchResponse(_ScopusModel):
    """Body of a Scopus search call."""

    search_results: SearchResults = Field(default_factory=SearchResults, alias="search-results")

    def identifiers(self) -> List[str]:
        """Journal identifiers of all hits, in result order, duplicates kept."""
        return [e.identifier for e in self.search_results.entry if e.identifier]


class SubjectArea(_ScopusModel):
    name: str = Field(default="", alias="$")
    abbrev: Optional[str] = Field(default=None, alias="@abbrev")
    code: Optional[str] = Field(default=None, alias="@code")


class SerialLink(_ScopusModel):
    ref: Optional[str] = Field(default=None, alias="@ref")
    href: Optional[str] = Field(default=None, alias="@href")


class MetricValue(_ScopusModel):
    value: Optional[float] = Field(default=None, alias="$")
    year: Optional[str] = Field(default=None, alias="@year")

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> Optional[float]:
        return _as_optional_float(v)


class SJRList(_ScopusModel):
    sjr: List[MetricValue] = Field(default_factory=list, alias="SJR")

    @field_validator("sjr", mode="before")
    @classmethod
    def coerce_sjr(cls, v: Any) -> Any:
        return _as_list(v)


class CiteScoreInfo(_ScopusModel):
    current: Optional[float] = Field(default=None, alias="citeScoreCurrentMetric")
    current_year: Optional[str] = Field(default=None, alias="citeScoreCurrentMetricYear")

    @field_validator("current", mode="before")
    @classmethod
    def coerce_current(cls, v: Any) -> Optional[float]:
        return _as_optional_float(v)


class SerialEntry(_ScopusModel):
    """One journal record from ``/serial/title/issn/{issn}``."""

    title: str = Field(..., alias="dc:title", min_length=1)
    publisher: str = Field(default="Unknown", alias="dc:publisher")
    source_id: Optional[str] = Field(default=None, alias="source-id")
    issn: Optional[str] = Field(default=None, alias="prism:issn")
    subject_area: List[SubjectArea] = Field(default_factory=list, alias="subject-area")
    links: List[SerialLink] = Field(default_factory=list, alias="link")
    cite_score_info: CiteScoreInfo = Field(
        default_factory=CiteScoreInfo, alias="citeScoreYearInfoList"
    )
    sjr_list: SJRList = Field(default_factory=SJRList, alias="SJRList")

    @field_validator("subject_area", "links", mode="before")
    @classmethod
    def coerce_lists(cls, v: Any) -> Any:
        return _as_list(v)

    @field_validator("publisher", mode="before")
    @classmethod
    def default_publisher(cls, v: Any) -> Any:
        return v or "Unknown"

    @field_validator("source_id", mode="before")
    @classmethod
    def stringify_source_id(cls, v: Any) -> Any:
        return None if v in (None, "") else str(v)

    @property
    def cite_score(self) -> Optional[float]:
        return self.cite_score_info.current

    @property
    def sjr(self) -> Optional[float]:
        for metric in self.sjr_list.sjr:
            if metric.value is not None:
                return metric.value
        return None

    @property
    def subject_areas(self) -> List[str]:
        return [s.name.strip() for s in self.subject_area if s.name and s.name.strip()]

    def link_for(self, ref: str) -> Optional[str]:
        for link in self.links:
            if link.ref == ref and link.href:
                return link.href
        return None


class SerialMetadata(_ScopusModel):
    entry: List[SerialEntry] = Field(default_factory=list)

    @field_validator("entry", mode="before")
    @classmethod
    def coerce_entry(cls, v: Any) -> Any:
        return _as_list(v)


class SerialResponse(_ScopusModel):
    """Body of a serial title call."""

    serial_metadata: SerialMetadata = Field(
        default_factory=SerialMetadata, alias="serial-metadata-response"
    )

    @property
    def first_entry(self) -> Optional[SerialEntry]:
        entries = self.serial_metadata.entry
        return entries[0] if entries else None
