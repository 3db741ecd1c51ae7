from unittest.mock import MagicMock

import requests

from coverresolver.metadata_providers.candidate import Candidate


def json_response(payload, status_code=200):
    """Build a mocked requests.Response carrying ``payload``."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Error", response=response
        )
    else:
        response.raise_for_status.return_value = None
    return response


def candidate(name, platforms=(), id=None, **raw):
    return Candidate(id=id, name=name, platform_ids=tuple(platforms), raw=dict(raw))
