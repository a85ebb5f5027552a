"""REST serialization of publish state."""

from datetime import timedelta
from unittest import mock

import pytest

from tests.testapp.models import Article
from tests.testapp.serializers import ArticleSerializer

pytestmark = pytest.mark.django_db


def test_serializes_derived_state(article_factory):
    data = ArticleSerializer(article_factory.build(scheduled=True)).data

    assert data["is_published"] is False
    assert data["is_draft"] is True
    assert data["is_scheduled"] is True
    assert "published" not in data


def test_create_with_published_flag(clock):
    serializer = ArticleSerializer(data={"title": "Hello", "published": True})

    assert serializer.is_valid(), serializer.errors
    article = serializer.save()

    assert article.published_at == clock.now()
    assert Article.objects.filter(pk=article.pk).exists()


def test_create_without_flag_is_draft(clock):
    serializer = ArticleSerializer(data={"title": "Hello"})

    assert serializer.is_valid(), serializer.errors
    article = serializer.save()

    assert article.is_draft()
    assert article.published_at is None


def test_explicit_published_at_wins_over_flag(clock):
    schedule_at = clock.now() + timedelta(days=2)
    serializer = ArticleSerializer(
        data={"title": "Later", "published": True, "published_at": schedule_at.isoformat()}
    )

    assert serializer.is_valid(), serializer.errors
    article = serializer.save()

    assert article.published_at == schedule_at
    assert article.is_scheduled()


def test_update_with_published_flag_drafts_record(article_factory):
    article = article_factory.create(published=True)
    serializer = ArticleSerializer(article, data={"published": False}, partial=True)

    assert serializer.is_valid(), serializer.errors
    serializer.save()

    article.refresh_from_db()
    assert article.is_draft()


def test_published_flag_goes_through_model_setter(article_factory, clock):
    article = article_factory.create()
    serializer = ArticleSerializer(article, data={"published": True}, partial=True)
    assert serializer.is_valid(), serializer.errors

    with mock.patch.object(
        Article, "set_published", autospec=True, side_effect=Article.set_published
    ) as set_published:
        serializer.save()

    set_published.assert_called_once_with(article, True)
    article.refresh_from_db()
    assert article.published_at == clock.now()
