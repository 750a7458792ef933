"""
Input validation utilities
"""
from uuid import UUID


def validate_ticket_id(ticket_id: str) -> bool:
    """
    Validate ticket ID format

    Supabase generates ticket primary keys with gen_random_uuid().

    Args:
        ticket_id: Ticket ID to validate

    Returns:
        True if valid UUID
    """
    try:
        UUID(str(ticket_id))
    except (ValueError, TypeError, AttributeError):
        return False
    return True


def sanitize_input(text: str, max_length: int = 10000) -> str:
    """
    Sanitize user input

    Args:
        text: Input text to sanitize
        max_length: Maximum allowed length

    Returns:
        Sanitized text
    """
    # Remove null bytes
    text = text.replace('\x00', '')

    # Truncate to max length
    if len(text) > max_length:
        text = text[:max_length]

    return text.strip()
