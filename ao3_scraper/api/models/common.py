from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

Slug = Annotated[str, Field(min_length=1)]


class Link(BaseModel):
    """
    A display label and the identifier taken from its URL

    Attributes:
        text (str): Display text
        slug (str): URL-derived identifier, percent-encoded the way AO3 encodes it
    """

    model_config = ConfigDict(frozen=True)

    text: str
    slug: Slug


class Pagination(BaseModel):
    """
    Represents the pagination bar of a listing

    Attributes:
        is_paginated (bool): Whether the listing spans more than one page
        current_page (int): Current page number. 0 when not paginated
        last_page (int): Last page number. 0 when not paginated
    """

    model_config = ConfigDict(frozen=True)

    is_paginated: bool = False
    current_page: int = Field(default=0, ge=0)
    last_page: int = Field(default=0, ge=0)
