"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration).
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers the CLI attaches to the application logger.

    CliRunner swaps sys.stderr per invocation; a handler left behind would
    write to a closed stream in later tests.
    """
    yield
    app_logger = logging.getLogger("richtext_engine")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.setLevel(logging.NOTSET)


@pytest.fixture
def emoji_table():
    """Small injected emoji table so tests do not depend on emoji data."""
    return {'smile': '😄', 'rocket': '🚀', '+1': '👍'}


@pytest.fixture
def upper_tokenizers():
    """Tokenizer mapping whose only language upper-cases the code."""
    return {'shout': lambda code: f'<span class="shout">{code.upper()}</span>'}
