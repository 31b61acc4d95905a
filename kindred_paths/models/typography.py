"""Small text helpers shared by card rendering and explanations."""


def capitalize(text: str) -> str:
    """Uppercase the first character, leave the rest alone."""
    if not text:
        return text
    return text[0].upper() + text[1:]


def enumerate_values(
    values: list[str],
    separator: str = ",",
    last_separator: str = "and",
) -> str:
    """
    Join values into an English list.

    Examples:
        [] -> ""
        ["red"] -> "red"
        ["red", "green"] -> "red and green"
        ["white", "red", "green"] -> "white, red, and green"
    """
    if not values:
        return ""
    if len(values) == 1:
        return values[0]
    if len(values) == 2:
        return f"{values[0]} {last_separator} {values[1]}"
    head = f"{separator} ".join(values[:-1])
    return f"{head}{separator} {last_separator} {values[-1]}"
