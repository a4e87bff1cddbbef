"""
Lever Board Validator

Confirms candidate names have a live Lever site via the public Postings API
(no auth):

    GET https://api.lever.co/v0/postings/{site}?mode=json

200 = site exists (possibly with zero postings), 404 = no such site.
Only the global instance is checked.

USAGE:
    from scrapers.lever.lever_board_validator import LeverBoardValidator

    validator = LeverBoardValidator(max_workers=20)
    valid = validator.validate(['figma', 'notarealco'])
"""

from scrapers.common.board_probe import BoardValidator, DEFAULT_MAX_WORKERS, DEFAULT_TIMEOUT

LEVER_API_URL = "https://api.lever.co/v0/postings"
LEVER_BOARD_URL_TEMPLATE = LEVER_API_URL + "/{name}?mode=json"


class LeverBoardValidator(BoardValidator):

    def __init__(self, max_workers: int = DEFAULT_MAX_WORKERS, timeout: float = DEFAULT_TIMEOUT):
        super().__init__(
            platform='lever',
            url_template=LEVER_BOARD_URL_TEMPLATE,
            max_workers=max_workers,
            timeout=timeout
        )
