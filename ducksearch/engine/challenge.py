"""Bot-challenge page detection."""

CHALLENGE_MARKER = "challenge-form"


def is_challenge(markup: str) -> bool:
    """Return True when the page is an anti-bot interstitial rather than results.

    This is a plain substring check and can misfire either way.
    """
    return CHALLENGE_MARKER in (markup or "")
