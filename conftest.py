"""Global pytest configuration and fixtures"""

from unittest import mock

import pytest

pytest_plugins = ["pytest_django"]


@pytest.fixture
def clock():
    """Freeze time for Article records and hand back the clock to move it"""
    from draftable.clock import FrozenClock
    from tests.testapp.models import Article

    frozen = FrozenClock()
    with mock.patch.object(Article, "draftable_clock", frozen):
        yield frozen


@pytest.fixture
def article_factory(clock):
    """ArticleFactory bound to the frozen clock"""
    from tests.factories import ArticleFactory

    return ArticleFactory
