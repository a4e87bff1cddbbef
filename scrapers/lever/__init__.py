"""
Lever ATS Module

Lever provides a public Postings API that returns JSON without
authentication. A site slug that returns 200 has a live board.

Components:
- lever_board_validator.py: Concurrent board existence checks

API Documentation: https://github.com/lever/postings-api
"""

from .lever_board_validator import (
    LeverBoardValidator,
    LEVER_API_URL,
    LEVER_BOARD_URL_TEMPLATE,
)

__all__ = [
    'LeverBoardValidator',
    'LEVER_API_URL',
    'LEVER_BOARD_URL_TEMPLATE',
]
