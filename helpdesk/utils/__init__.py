"""
Utility functions
"""
from helpdesk.utils.logger import setup_logger, get_logger
from helpdesk.utils.rounding import round_half_up
from helpdesk.utils.validators import (
    validate_ticket_id,
    sanitize_input
)

__all__ = [
    "setup_logger",
    "get_logger",
    "round_half_up",
    "validate_ticket_id",
    "sanitize_input",
]
