"""
Greenhouse ATS Module

Board existence checks against the public Job Board API
(https://developers.greenhouse.io/job-board.html).
"""

from .greenhouse_board_validator import (
    GreenhouseBoardValidator,
    GREENHOUSE_API_URL,
    GREENHOUSE_BOARD_URL_TEMPLATE,
)

__all__ = [
    'GreenhouseBoardValidator',
    'GREENHOUSE_API_URL',
    'GREENHOUSE_BOARD_URL_TEMPLATE',
]
