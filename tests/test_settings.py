import runpy

import donorhub.settings
from donorhub.exceptions import envelope_exception_handler


def load_settings():
    return runpy.run_path(donorhub.settings.__file__)


def test_debug_is_off_unless_asked_for(monkeypatch):
    monkeypatch.delenv('DJANGO_DEBUG', raising=False)
    assert load_settings()['DEBUG'] is False

    monkeypatch.setenv('DJANGO_DEBUG', 'true')
    assert load_settings()['DEBUG'] is True


def test_unhandled_error_detail_only_in_debug(settings):
    settings.DEBUG = False
    body = envelope_exception_handler(RuntimeError('db exploded'), {}).data
    assert body == {'success': False, 'message': 'Internal server error'}

    settings.DEBUG = True
    body = envelope_exception_handler(RuntimeError('db exploded'), {}).data
    assert body['error'] == 'db exploded'
