# The mobile API gates some traffic on a desktop browser signature, so every
# request carries the same Windows User-Agent.
DESKTOP_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/109.0.0.0 Safari/537.36'
)


def get_windows_ua() -> str:
    """Returns the fixed Windows User-Agent string."""
    return DESKTOP_USER_AGENT
