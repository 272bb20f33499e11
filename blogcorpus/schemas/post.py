import re
from typing import List

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, field_validator

from blogcorpus.settings import settings
from blogcorpus.utils import calculate_reading_time

_LEADING_BLANK_LINES = re.compile(r"\A(?:[ \t]*\r?\n)+")


class PostSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    title: str
    description: str
    date: AwareDatetime
    tags: List[str] = Field(default_factory=list)
    readingTime: str


class Post(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    date: AwareDatetime
    tags: List[str] = Field(default_factory=list)
    body: str  # Markdown content without the header block

    @field_validator("body")
    @classmethod
    def trim_blank_edges(cls, value: str) -> str:
        return _LEADING_BLANK_LINES.sub("", value).rstrip()

    def summary(self, slug: str) -> PostSummary:
        return PostSummary(
            slug=slug,
            title=self.title,
            description=self.description,
            date=self.date,
            tags=list(self.tags),
            readingTime=calculate_reading_time(self.body, settings.WORDS_PER_MINUTE),
        )
