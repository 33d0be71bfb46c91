import logging

import pytest

from media_grabber.i18n import set_lang


@pytest.fixture(autouse=True)
def english_messages():
    """Console messages are asserted in English whatever the machine's locale."""
    set_lang("en")
    yield
    set_lang("en")


@pytest.fixture(autouse=True)
def restore_root_logger_level():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)
