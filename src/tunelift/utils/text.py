"""
Text formatting utilities.

Cross-cutting helpers for building user-facing messages.
"""


def pluralise(number: int, singular: str, plural: str) -> str:
    """
    Format a count with the matching singular or plural noun.

    Counts other than one use a thousands separator.

    Args:
        number: The count
        singular: Noun used when the count is exactly one
        plural: Noun used for every other count

    Returns:
        Formatted string such as "1 track" or "1,024 tracks"

    Example:
        pluralise(3, "playlist", "playlists") -> "3 playlists"
    """
    if number == 1:
        return f"{number} {singular}"
    return f"{number:,} {plural}"
