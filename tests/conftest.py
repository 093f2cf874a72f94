"""Pytest configuration and fixtures."""

import logging

import pytest

from json_converter import CollectingObserver, Converter


@pytest.fixture
def converter():
    """Converter logging through the default observer."""
    return Converter()


@pytest.fixture
def observer():
    """Observer keeping every report in memory."""
    return CollectingObserver()


@pytest.fixture
def quiet_converter(observer):
    """Converter reporting to a CollectingObserver instead of the log."""
    return Converter(observer=observer)


@pytest.fixture
def demo_json():
    """The JSON text printed by the demo command."""
    return '{"name":"zy","num":10}'


@pytest.fixture
def sample_mixed_json():
    """Nested JSON text with every JSON value kind."""
    return '''
    {
        "metadata": {"version": "1.0", "created": "2024-01-01"},
        "data": [
            {"type": "A", "values": [1, 2, 3]},
            {"type": "B", "values": [4.5, null, true]}
        ],
        "config": {"enabled": false}
    }
    '''


@pytest.fixture
def error_records(caplog):
    """Callable returning the ERROR records captured so far."""
    caplog.set_level(logging.WARNING)

    def records(level=logging.ERROR):
        return [record for record in caplog.records if record.levelno == level]

    return records
