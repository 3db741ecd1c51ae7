from unittest.mock import MagicMock, patch

import pytest
import requests

from coverresolver.common.exceptions import MetadataServiceError
from coverresolver.metadata_providers.rawg import RAWGProvider

from tests.helpers import json_response


@pytest.fixture
def mock_session():
    with patch("requests.Session") as mock:
        yield mock.return_value


def _game(id, name, platform_ids, image="https://media.rawg.io/x.jpg"):
    return {
        "id": id,
        "name": name,
        "background_image": image,
        "platforms": [{"platform": {"id": pid, "name": str(pid)}} for pid in platform_ids],
    }


def test_search_params_without_key(mock_session):
    mock_session.request.return_value = json_response({"results": []})
    provider = RAWGProvider()

    assert provider.search("Luigi's Mansion", (11,)) == []

    method, url = mock_session.request.call_args[0]
    params = mock_session.request.call_args[1]["params"]
    assert method == "GET"
    assert url == "https://api.rawg.io/api/games"
    assert params == {"search": "Luigi's Mansion", "page_size": "10", "platforms": "11"}
    assert "timeout" in mock_session.request.call_args[1]


def test_search_params_with_key_and_no_platform(mock_session):
    mock_session.request.return_value = json_response({"results": []})
    RAWGProvider(api_key="abc").search("Halo", ())

    params = mock_session.request.call_args[1]["params"]
    assert params["key"] == "abc"
    assert "platforms" not in params


def test_search_parses_candidates(mock_session):
    mock_session.request.return_value = json_response(
        {"results": [_game(1, "Halo", [1, 14]), {"id": 2, "name": "Halo 2", "platforms": None}]}
    )
    cands = RAWGProvider().search("Halo", ())

    assert [c.name for c in cands] == ["Halo", "Halo 2"]
    assert cands[0].platform_ids == (1, 14)
    assert cands[1].platform_ids == ()


def test_find_cover_prefers_platform_match(mock_session):
    mock_session.request.return_value = json_response(
        {
            "results": [
                _game(1, "Animal Crossing: New Horizons", [7], "https://img/switch.jpg"),
                _game(2, "Animal Crossing (2001)", [11], "https://img/gc.jpg"),
            ]
        }
    )
    url = RAWGProvider().find_cover("Animal Crossing", "Nintendo GameCube")
    assert url == "https://img/gc.jpg"


def test_find_cover_empty_image_is_none(mock_session):
    mock_session.request.return_value = json_response({"results": [_game(1, "Foo", [], "")]})
    assert RAWGProvider().find_cover("Foo", "Unknown") is None


def test_find_cover_no_results(mock_session):
    mock_session.request.return_value = json_response({"results": []})
    assert RAWGProvider().find_cover("Foo", "Nintendo 64") is None


def test_http_error_raises_service_error(mock_session):
    mock_session.request.return_value = json_response({}, status_code=401)
    with pytest.raises(MetadataServiceError) as exc:
        RAWGProvider().search("Foo", ())
    assert exc.value.status == 401
    assert "RAWG" in str(exc.value)


def test_network_error_raises_service_error(mock_session):
    mock_session.request.side_effect = requests.ConnectionError("boom")
    with pytest.raises(MetadataServiceError):
        RAWGProvider().search("Foo", ())


def test_non_json_body_raises_service_error(mock_session):
    response = json_response(None)
    response.json.side_effect = ValueError("not json")
    mock_session.request.return_value = response
    with pytest.raises(MetadataServiceError):
        RAWGProvider().search("Foo", ())


def test_unexpected_shape_raises_service_error(mock_session):
    mock_session.request.return_value = json_response({"results": "nope"})
    with pytest.raises(MetadataServiceError):
        RAWGProvider().search("Foo", ())


def test_explicit_session_is_used():
    session = MagicMock()
    session.request.return_value = json_response({"results": []})
    RAWGProvider(session=session).search("Foo", ())
    session.request.assert_called_once()


def test_rawg_needs_no_credentials():
    RAWGProvider(session=MagicMock()).check_credentials()
