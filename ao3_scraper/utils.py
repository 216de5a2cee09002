from ao3_scraper.api.enums import SanitizationPolicy, WorkSortOption


def atoi_with_comma(value: str) -> int:
    """
    Converts a count with thousands separators (e.g. "1,234") to an integer.

    Args:
        value (str): Count text

    Returns:
        int: Count

    Raises:
        ValueError: If the text is not a non-negative integer
    """

    digits = value.replace(",", "").strip()
    if not digits.isdigit():
        raise ValueError(f"Not a count: {value!r}")
    return int(digits)


def serialize_sanitization_policy(policy_value: str | None) -> SanitizationPolicy:
    """
    Converts a string to a SanitizationPolicy enum.

    Args:
        policy_value (str): Policy string

    Returns:
        SanitizationPolicy: Policy enum. Defaults to SanitizationPolicy.AO3
    """

    if policy_value is None:
        return SanitizationPolicy.AO3

    return SanitizationPolicy(policy_value)


def serialize_sort_by(sort_value: str | None) -> WorkSortOption | None:
    """
    Converts a string to a WorkSortOption enum.

    Args:
        sort_value (str): Sort option string

    Returns:
        WorkSortOption | None: Sort option enum, or None to keep AO3's default order
    """

    if sort_value is None:
        return None

    return WorkSortOption(sort_value)
