"""
Greenhouse Board Validator

Confirms candidate names have a live Greenhouse job board via the public
Job Board API (no auth):

    GET https://boards-api.greenhouse.io/v1/boards/{board_token}/jobs

200 = board exists, 404 = no such board.

USAGE:
    from scrapers.greenhouse.greenhouse_board_validator import GreenhouseBoardValidator

    validator = GreenhouseBoardValidator(max_workers=20)
    valid = validator.validate(['stripe', 'notarealco'])
"""

from scrapers.common.board_probe import BoardValidator, DEFAULT_MAX_WORKERS, DEFAULT_TIMEOUT

GREENHOUSE_API_URL = "https://boards-api.greenhouse.io/v1/boards"
GREENHOUSE_BOARD_URL_TEMPLATE = GREENHOUSE_API_URL + "/{name}/jobs"


class GreenhouseBoardValidator(BoardValidator):

    def __init__(self, max_workers: int = DEFAULT_MAX_WORKERS, timeout: float = DEFAULT_TIMEOUT):
        super().__init__(
            platform='greenhouse',
            url_template=GREENHOUSE_BOARD_URL_TEMPLATE,
            max_workers=max_workers,
            timeout=timeout
        )
