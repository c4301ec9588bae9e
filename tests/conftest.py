"""
Pytest configuration and shared fixtures for Custom Glasses Maker tests.

This module provides shared fixtures and configuration for all test modules.
"""

from concurrent.futures import Future

import pytest
import numpy as np
import cv2

from glasses_core.state import initial_state, photo_loaded
from glasses_core.selection import STICKER, pointer_down


@pytest.fixture
def sample_image():
    """
    Create a simple test photo (RGB).

    Returns:
        np.ndarray: 240x400 RGB image, red left half and blue right half
    """
    img = np.zeros((240, 400, 3), dtype=np.uint8)
    img[:, :200] = [255, 0, 0]  # Red left half
    img[:, 200:] = [0, 0, 255]  # Blue right half
    return img


@pytest.fixture
def sample_large_image():
    """
    Create a photo larger than the decode limit.

    Returns:
        np.ndarray: 1600x2400 RGB image
    """
    return np.random.randint(0, 255, (1600, 2400, 3), dtype=np.uint8)


@pytest.fixture
def png_bytes(sample_image):
    """The sample photo as an uploaded PNG file."""
    ok, buf = cv2.imencode(".png", cv2.cvtColor(sample_image, cv2.COLOR_RGB2BGR))
    assert ok
    return buf.tobytes()


@pytest.fixture
def fresh_state():
    """Initial state: no photo, default sticker, nothing selected."""
    return initial_state()


@pytest.fixture
def photo_state(fresh_state, sample_image):
    """State with the sample photo loaded."""
    return photo_loaded(fresh_state, sample_image)


@pytest.fixture
def selected_state(photo_state):
    """State with a photo loaded and the sticker selected."""
    return pointer_down(photo_state, STICKER)


class ManualPool:
    """
    Executor stand-in whose jobs only run when the test says so.

    Lets tests finish decode requests in any order.
    """

    def __init__(self):
        self.jobs = []

    def submit(self, fn, *args, **kwargs):
        future = Future()
        self.jobs.append((future, fn, args, kwargs))
        return future

    def finish(self, index):
        future, fn, args, kwargs = self.jobs[index]
        future.set_result(fn(*args, **kwargs))

    def fail(self, index, error):
        self.jobs[index][0].set_exception(error)


@pytest.fixture
def manual_pool():
    return ManualPool()


@pytest.fixture
def session_state(mocker):
    """
    Replace ``st.session_state`` with a plain dict.

    Returns:
        dict: The fake session state shared by every module importing streamlit
    """
    import streamlit as st

    state = {}
    mocker.patch.object(st, "session_state", state)
    return state


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
