from enum import Enum


class SanitizationPolicy(Enum):
    """
    Enum for HTML sanitization policies

    Attributes:
        NONE (str): No sanitization
        AO3 (str): AO3's limited HTML
        AO3_ANDROID (str): AO3's limited HTML supported by Android's TextView
    """

    NONE = "none"
    AO3 = "ao3"
    AO3_ANDROID = "ao3-android"


DEFAULT_SANITIZATION_POLICY = SanitizationPolicy.AO3
SANITIZATION_POLICY_VALUES = [policy.value for policy in SanitizationPolicy]


class TagType(Enum):
    """
    Enum for the optional tags listed on a work blurb

    The value of each member is the class of the `<li>` wrapping the tag.

    Attributes:
        WARNINGS (str): warnings
        RELATIONSHIPS (str): relationships
        CHARACTERS (str): characters
        FREEFORMS (str): freeforms
    """

    WARNINGS = "warnings"
    RELATIONSHIPS = "relationships"
    CHARACTERS = "characters"
    FREEFORMS = "freeforms"

    @classmethod
    def from_class_attr(cls, class_attr: str) -> "TagType":
        """
        Finds the tag type named by a class attribute

        Args:
            class_attr (str): Value of the `class` attribute

        Returns:
            (TagType): Matching tag type

        Raises:
            ValueError: If no class token or more than one names a tag type
        """

        matches = {cls(token) for token in class_attr.split() if token in cls._value2member_map_}
        if len(matches) != 1:
            raise ValueError(f"Unknown tag type: {class_attr!r}")
        return matches.pop()


class WorkSortOption(Enum):
    DATE_UPDATED = "date-updated"
    DATE_POSTED = "date-posted"
    AUTHOR = "author"
    TITLE = "title"
    WORD_COUNT = "word-count"
    HITS = "hits"
    KUDOS = "kudos"
    COMMENTS = "comments"
    BOOKMARKS = "bookmarks"


WORK_SORT_OPTION_VALUES = [option.value for option in WorkSortOption]

WORK_SORT_QUERY_KEY = "work_search[sort_column]"

WORK_SORT_QUERY_PARAM = {
    WorkSortOption.DATE_UPDATED: "revised_at",
    WorkSortOption.DATE_POSTED: "created_at",
    WorkSortOption.AUTHOR: "authors_to_sort_on",
    WorkSortOption.TITLE: "title_to_sort_on",
    WorkSortOption.WORD_COUNT: "word_count",
    WorkSortOption.HITS: "hits",
    WorkSortOption.KUDOS: "kudos_count",
    WorkSortOption.COMMENTS: "comments_count",
    WorkSortOption.BOOKMARKS: "bookmarks_count",
}
