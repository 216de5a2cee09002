from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, model_validator

from ao3_scraper.api.models.common import Link, Slug
from ao3_scraper.api.models.works import WorkListing


class Series(BaseModel):
    """
    Represents an AO3 series

    Attributes:
        slug (str): Series ID
        title (str): Series title
        is_anonymous (bool): Whether the series is anonymous
        creators (list[Link]): Series creators
        begun (str): Date the series was begun
        updated (str): Date the series was last updated
        description (str): Sanitized description
        notes (str): Sanitized notes
        words (int): Word count
        num_works (int): Number of works
        is_complete (bool): Whether the series is complete
        bookmarks (int): Bookmarks count
        works (list[WorkListing]): Works in the series, in order
    """

    model_config = ConfigDict(frozen=True)

    slug: Slug
    title: str
    is_anonymous: bool = False
    creators: list[Link] = Field(default_factory=list)
    begun: str = ""
    updated: str = ""
    description: str = ""
    notes: str = ""
    words: NonNegativeInt = 0
    num_works: NonNegativeInt = 0
    is_complete: bool = False
    bookmarks: NonNegativeInt = 0

    works: list[WorkListing] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_invariants(self):
        if self.is_anonymous and self.creators:
            raise ValueError("an anonymous series cannot list creators")
        return self
