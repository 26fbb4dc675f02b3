import pytest

from engine.frame_clock import ManualFrameClock
from engine.session_driver import SessionDriver
from models.enums import LogLevel
from models.spring_config import SpringConfig
from models.subject import HeadlessSubject
from utils.logger import configure_logger

FRAME_MS = 1000 / 60


@pytest.fixture(autouse=True)
def plain_logger():
    """No ANSI colours so captured output can be asserted on"""
    configure_logger(min_level=LogLevel.INFO, use_colors=False)
    yield
    configure_logger(min_level=LogLevel.INFO, use_colors=True)


@pytest.fixture
def clock():
    return ManualFrameClock(start_ms=0.0, frame_ms=FRAME_MS)


@pytest.fixture
def driver(clock):
    return SessionDriver(clock)


@pytest.fixture
def subject():
    return HeadlessSubject("card", width=100, height=50)


@pytest.fixture
def default_config():
    return SpringConfig()


@pytest.fixture
def one_second_config():
    """duration=1.0s, bounce=0 animating transform"""
    return SpringConfig(duration=1.0, bounce=0.0)
