from typing import List

from pydantic import BaseModel, Field, field_validator

from paperhome.core.models import Query


class PaperAnalysis(BaseModel):
    """Field, keywords and summary extracted from a paper."""

    field: str = Field(..., description="Broad research field (e.g., 'Computer Science', 'Education', 'Law').")
    keywords: List[str] = Field(..., description="Five primary keywords of the paper, most important first.")
    summary: str = Field("", description="Short abstract-style summary of the paper.")

    @field_validator("keywords")
    @classmethod
    def clean_keywords(cls, v: List[str]) -> List[str]:
        return [k.strip() for k in v if k and k.strip()]

    def to_query(self) -> Query:
        return Query(field=self.field, keywords=self.keywords)
