"""
Helper functions for Wikipedia page title sanitization and validation.
"""

def get_sanitized_page_title(page_title: str) -> str:
    """Returns the sanitized version of the provided page title, in the format
    used to store page titles in the link-graph database.

    Examples:
      "Notre Dame Fighting Irish"   =>   "Notre_Dame_Fighting_Irish"
      "Farmers' market"             =>   "Farmers\\'_market"

    Raises:
      ValueError: If the provided page title is invalid.
    """
    validate_page_title(page_title)
    return (page_title.strip()
            .replace('\\', '\\\\')  # Escape backslashes first
            .replace("'", "\\'")
            .replace('"', '\\"')
            .replace(' ', '_'))


def get_readable_page_title(sanitized_page_title: str) -> str:
    """Returns the human-readable page title from the sanitized page title.

    Examples:
      "Notre_Dame_Fighting_Irish"   => "Notre Dame Fighting Irish"
      "Farmers\\'_market"           => "Farmers' market"
    """
    return (sanitized_page_title.strip()
            .replace('_', ' ')
            .replace('\\"', '"')
            .replace("\\'", "'")
            .replace('\\\\', '\\'))  # Unescape backslashes last


def is_positive_int(val) -> bool:
    """Returns whether or not the provided value is a positive integer (booleans excluded)."""
    return isinstance(val, int) and not isinstance(val, bool) and val > 0


def validate_page_id(page_id: int):
    """Validates the provided value is a valid page ID.

    Raises:
      ValueError: If the provided page ID is invalid.
    """
    if not is_positive_int(page_id):
        raise ValueError(
            f'Invalid page ID "{page_id}" provided. Page ID must be a positive integer.'
        )


def validate_page_title(page_title: str):
    """Validates the provided value is a valid page title.

    Raises:
      ValueError: If the provided page title is invalid.
    """
    if not isinstance(page_title, str) or not page_title.strip():
        raise ValueError(
            f'Invalid page title "{page_title}" provided. Page title must be a non-empty string.'
        )
