from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

NOT_AVAILABLE = "N/A"


class Article(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1, description="Article headline (webTitle)")
    category: str = Field(min_length=1, description="Section name (sectionName)")
    author: str = Field(
        default=NOT_AVAILABLE, description='"by: <name>. " or N/A'
    )
    published_at: str = Field(
        default=NOT_AVAILABLE,
        description="Raw webPublicationDate timestamp or N/A",
    )
    url: str = Field(min_length=1, description="Article URL (webUrl)")


class FeedResult(BaseModel):
    articles: list[Article] = Field(default_factory=list)
    error: str | None = Field(
        default=None, description="Why parsing stopped early, if it did"
    )

    @property
    def ok(self) -> bool:
        return self.error is None


class ArticleView(Article):
    display_date: str | None = Field(
        default=None, description="Publication date formatted for display"
    )


class SearchResponse(BaseModel):
    query: str = Field(description="Search term sent to the feed")
    fetched_at: datetime = Field(description="UTC timestamp of the fetch")
    ok: bool = True
    error: str | None = None
    items: list[ArticleView] = Field(default_factory=list)
