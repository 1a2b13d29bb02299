from unittest.mock import MagicMock

import pytest
import requests

from job_portal.errors import BackendError, TransportError
from job_portal.geo import GeoDirectory


def _geo(json_body=None, error=None, username='demo'):
    session = MagicMock()
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value.json.return_value = json_body
    return GeoDirectory('https://countries.test/all', 'https://geonames.test/searchJSON', username,
                        session=session), session


def test_countries_sorted_by_name():
    geo, session = _geo([
        {'cca2': 'US', 'name': {'common': 'United States'}},
        {'cca2': 'IN', 'name': {'common': 'India'}},
        {'name': {'common': 'Nowhere'}},
    ])
    assert geo.countries() == [{'code': 'IN', 'name': 'India'}, {'code': 'US', 'name': 'United States'}]
    assert session.get.call_args[1]['params'] == {'fields': 'name,cca2'}


def test_states_are_distinct_and_sorted():
    geo, session = _geo({'geonames': [{'name': 'Karnataka'}, {'name': 'Goa'}, {'name': 'Goa'}]})
    assert geo.states('IN') == ['Goa', 'Karnataka']
    params = session.get.call_args[1]['params']
    assert params['featureCode'] == 'ADM1'
    assert params['username'] == 'demo'


def test_cities_need_both_parents():
    geo, session = _geo({'geonames': []})
    assert geo.cities('IN', '') == []
    session.get.assert_not_called()


def test_geonames_error_status():
    geo, _ = _geo({'status': {'message': 'user does not exist.', 'value': 10}})
    with pytest.raises(BackendError, match='user does not exist'):
        geo.states('IN')


def test_missing_username():
    geo, session = _geo(username='')
    with pytest.raises(BackendError):
        geo.states('IN')
    session.get.assert_not_called()


def test_network_failure():
    geo, _ = _geo(error=requests.Timeout('slow'))
    with pytest.raises(TransportError):
        geo.countries()


def test_close_releases_session():
    geo, session = _geo({})
    geo.close()
    session.close.assert_called_once_with()
