"""Deterministic clean-up of raw model output into final alt text."""

BANNED_PREFIXES = (
    "image of ",
    "picture of ",
    "photo of ",
    "photograph of ",
    "alt text: ",
    "alt: ",
)

SENTENCE_TERMINATORS = (".", "!", "?")


def _strip_quotes(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ('"', "'"):
        return text[1:-1]
    return text


def _strip_banned_prefix(text: str) -> str:
    lowered = text.lower()
    for prefix in BANNED_PREFIXES:
        if lowered.startswith(prefix):
            return text[len(prefix) :]
    return text


def _truncate(text: str, max_chars: int) -> str:
    if len(text) <= max_chars:
        return text

    # Positions just past each terminator, so the terminator itself is kept
    sentence_ends = [i + 1 for i, ch in enumerate(text) if ch in SENTENCE_TERMINATORS]
    valid_ends = [end for end in sentence_ends if end <= max_chars]
    if valid_ends:
        return text[: valid_ends[-1]].strip()
    return text[:max_chars].rstrip()


def _shape_once(text: str, max_chars: int) -> str:
    cleaned = _strip_quotes(text.strip())
    cleaned = _strip_banned_prefix(cleaned)
    if cleaned:
        cleaned = cleaned[0].upper() + cleaned[1:]
    cleaned = _truncate(cleaned, max_chars)
    if cleaned.endswith("."):
        cleaned = cleaned[:-1]
    return cleaned


def shape_alt_text(raw: str, max_chars: int) -> str:
    """Turn raw model output into bounded, well-formed alt text.

    Trims whitespace, removes one layer of wrapping quotes and a leading
    "Image of"-style phrase, capitalizes the first letter, cuts overlong text
    at the last sentence end that fits (or hard at max_chars when none does)
    and drops a trailing period.

    The pass is repeated until the text stops changing, so shaping
    already-shaped text is a no-op.

    Args:
        raw: Text as returned by the model
        max_chars: Upper bound on the result length for the store's style

    Returns:
        Final alt text, possibly empty
    """
    if max_chars <= 0:
        raise ValueError("max_chars must be positive")

    current = raw
    while True:
        shaped = _shape_once(current, max_chars)
        if shaped == current:
            return shaped
        current = shaped
