import logging

import numpy as np
import pytest

from geoconic.logging_utils import debug_log_call, safe_repr

logger = logging.getLogger("geoconic.tests.logging")


@debug_log_call(logger)
def _scale(m, factor=2.0):
    return m * factor


@debug_log_call(logger, name="explode", log_result=False)
def _explode():
    raise RuntimeError("boom")


def test_safe_repr_shortens_arrays():
    assert safe_repr(np.eye(3)).startswith("ndarray([[1")
    assert safe_repr(np.zeros((10, 10))) == "ndarray(shape=(10, 10), dtype=float64)"
    assert safe_repr(list(range(10))).endswith(", ...]")


def test_debug_log_call_traces_entry_and_exit(caplog):
    with caplog.at_level(logging.DEBUG, logger=logger.name):
        _scale(np.ones(3), factor=3.0)
    messages = [record.getMessage() for record in caplog.records]
    assert any(message.startswith("Entering _scale") and "factor=3.0" in message for message in messages)
    assert any(message.startswith("Exiting _scale -> ndarray(") for message in messages)


def test_debug_log_call_is_silent_above_debug(caplog):
    with caplog.at_level(logging.INFO, logger=logger.name):
        _scale(np.ones(3))
    assert caplog.records == []


def test_debug_log_call_logs_and_reraises(caplog):
    with caplog.at_level(logging.DEBUG, logger=logger.name):
        with pytest.raises(RuntimeError):
            _explode()
    assert any(record.getMessage() == "Exception in explode" for record in caplog.records)
