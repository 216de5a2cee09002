from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, model_validator

from ao3_scraper.api.models.common import Link, Pagination, Slug


class _Authored(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_anonymous: bool = False
    authors: list[Link] = Field(default_factory=list)
    recipients: list[Link] = Field(default_factory=list)

    is_series: bool = False
    series: Link | None = None
    series_part: NonNegativeInt = 0

    @model_validator(mode="after")
    def check_invariants(self):
        if self.is_anonymous and self.authors:
            raise ValueError("an anonymous work cannot list authors")
        if not self.is_series and (self.series is not None or self.series_part != 0):
            raise ValueError("a work outside a series cannot have series details")
        return self


class WorkListing(_Authored):
    """
    Represents a work blurb, as listed on tag, user and series pages

    Attributes:
        title (str): Work title
        slug (str): Work ID
        last_updated (str): Last updated date, e.g. "01 Aug 2011"
        is_anonymous (bool): Whether the work is anonymous
        authors (list[Link]): Work authors
        recipients (list[Link]): Gift recipients
        rating (str): Rating symbol, e.g. "Teen And Up Audiences"
        warnings (str): Warnings symbol
        category (str): Category symbol
        status (str): Completion status symbol, e.g. "Work in Progress"
        fandom_tags (list[Link]): Fandom tags
        warning_tags (list[Link]): Warning tags
        relationship_tags (list[Link]): Relationship tags
        character_tags (list[Link]): Character tags
        freeform_tags (list[Link]): Additional tags
        is_series (bool): Whether the work is part of a series
        series (Link | None): Series the work belongs to
        series_part (int): Position of the work in the series
        summary (str): Sanitized summary
        language (str): Language
        words (int): Word count
        chapters (str): Chapter progress, e.g. "3/?"
        kudos (int): Kudos count
        bookmarks (int): Bookmarks count
        hits (int): Hits count
    """

    title: str
    slug: Slug
    last_updated: str

    rating: str
    warnings: str
    category: str
    status: str

    fandom_tags: list[Link] = Field(default_factory=list)
    warning_tags: list[Link] = Field(default_factory=list)
    relationship_tags: list[Link] = Field(default_factory=list)
    character_tags: list[Link] = Field(default_factory=list)
    freeform_tags: list[Link] = Field(default_factory=list)

    summary: str = ""
    language: str
    words: NonNegativeInt = 0
    chapters: str
    kudos: NonNegativeInt = 0
    bookmarks: NonNegativeInt = 0
    hits: NonNegativeInt = 0


class Work(_Authored):
    """
    Represents a work, as shown on its own page

    Attributes:
        slug (str): Work ID
        title (str): Work title
        rating_tags (list[Link]): Rating tags
        warning_tags (list[Link]): Warning tags
        category_tags (list[Link]): Category tags
        fandom_tags (list[Link]): Fandom tags
        relationship_tags (list[Link]): Relationship tags
        character_tags (list[Link]): Character tags
        freeform_tags (list[Link]): Additional tags
        language (str): Language
        published (str): Published date
        updated (str): Updated or completed date
        words (int): Word count
        chapters (str): Chapter progress
        comments (int): Comments count
        kudos (int): Kudos count
        bookmarks (int): Bookmarks count
        hits (int): Hits count
        summary (str): Sanitized summary
        html_download_slug (str): Download slug of the HTML file
        html_download_path (str): Download path of the HTML file (computed)
    """

    slug: Slug
    title: str

    rating_tags: list[Link] = Field(default_factory=list)
    warning_tags: list[Link] = Field(default_factory=list)
    category_tags: list[Link] = Field(default_factory=list)
    fandom_tags: list[Link] = Field(default_factory=list)
    relationship_tags: list[Link] = Field(default_factory=list)
    character_tags: list[Link] = Field(default_factory=list)
    freeform_tags: list[Link] = Field(default_factory=list)

    language: str = ""
    published: str = ""
    updated: str = ""
    words: NonNegativeInt = 0
    chapters: str = ""
    comments: NonNegativeInt = 0
    kudos: NonNegativeInt = 0
    bookmarks: NonNegativeInt = 0
    hits: NonNegativeInt = 0

    summary: str = ""

    html_download_slug: Slug

    @property
    def html_download_path(self) -> str:
        return f"/downloads/{self.html_download_slug}"


class WorkList(BaseModel):
    """
    Represents a page of work blurbs, e.g. /tags/[tag]/works

    Attributes:
        works (list[WorkListing]): Works listed on the page
        count (int): Total number of works across all pages
        pagination (Pagination): Pagination state
    """

    model_config = ConfigDict(frozen=True)

    works: list[WorkListing] = Field(default_factory=list)
    count: NonNegativeInt = 0
    pagination: Pagination = Field(default_factory=Pagination)
