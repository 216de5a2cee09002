from pydantic import BaseModel, ConfigDict, NonNegativeInt

from ao3_scraper.api.models.common import Slug


class FandomCategory(BaseModel):
    """
    Represents an AO3 media category, e.g. "Anime & Manga"

    Attributes:
        name (str): Category name
        slug (str): Category slug, e.g. "Anime%20*a*%20Manga"
    """

    model_config = ConfigDict(frozen=True)

    name: str
    slug: Slug


class Fandom(BaseModel):
    """
    Represents a fandom listed under a media category

    Attributes:
        name (str): Fandom name
        letter (str): Alphabetical section the fandom is listed under
        slug (str): Fandom tag slug
        count (int): Number of works tagged with the fandom
    """

    model_config = ConfigDict(frozen=True)

    name: str
    letter: str
    slug: Slug
    count: NonNegativeInt = 0
