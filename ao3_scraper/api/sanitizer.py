import nh3

import ao3_scraper.api.exceptions
from ao3_scraper.api.enums import SanitizationPolicy

# AO3's limited HTML. <p> and <br> are implicitly allowed.
# More info: https://archiveofourown.org/works/5191202/chapters/11961779
AO3_TAGS = {
    "p",
    "br",
    "b",
    "strong",
    "i",
    "em",
    "strike",
    "s",
    "del",
    "u",
    "ins",
    "sub",
    "sup",
    "big",
    "small",
    "tt",
    "pre",
    "code",
    "kbd",
    "samp",
    "var",
    "address",
    "cite",
    "q",
}

# Tags Android's TextView cannot render
ANDROID_UNSUPPORTED_TAGS = {"ins", "pre", "code", "kbd", "samp", "var", "address", "q"}

AO3_ANDROID_TAGS = AO3_TAGS - ANDROID_UNSUPPORTED_TAGS

STANDARD_ATTRIBUTES = {"dir", "id", "lang", "title"}
STANDARD_URL_SCHEMES = {"http", "https", "mailto"}

ALLOWED_TAGS = {
    SanitizationPolicy.NONE: None,
    SanitizationPolicy.AO3: AO3_TAGS,
    SanitizationPolicy.AO3_ANDROID: AO3_ANDROID_TAGS,
}


class Sanitizer:
    """
    Strips user-provided HTML down to an allow-list of tags

    Args:
        policy (SanitizationPolicy | str): Sanitization policy

    Raises:
        ao3_scraper.api.exceptions.InvalidConfiguration: If the policy is unknown
    """

    def __init__(self, policy: SanitizationPolicy | str = SanitizationPolicy.AO3):
        try:
            self.policy = SanitizationPolicy(policy)
        except ValueError as e:
            raise ao3_scraper.api.exceptions.InvalidConfiguration(
                f"Invalid sanitization policy: {policy!r}", errors=[e]
            ) from e

        self._allowed_tags = ALLOWED_TAGS[self.policy]

    def sanitize(self, html: str) -> str:
        if self._allowed_tags is None:
            return html

        return nh3.clean(
            html,
            tags=self._allowed_tags,
            attributes={"*": STANDARD_ATTRIBUTES},
            url_schemes=STANDARD_URL_SCHEMES,
            link_rel=None,
        )
