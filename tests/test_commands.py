"""The draftable_status management command."""

from io import StringIO

import pytest
from django.core.management import CommandError, call_command

pytestmark = pytest.mark.django_db


def run(*args):
    out = StringIO()
    call_command("draftable_status", *args, stdout=out)
    return out.getvalue()


def test_reports_counts_per_model(article_factory):
    article_factory.create()
    article_factory.create(scheduled=True)
    article_factory.create(published=True)

    output = run()

    assert "testapp.Article" in output
    assert "1 published, 1 scheduled, 2 drafts" in output


def test_counts_follow_the_clock(clock, article_factory):
    article_factory.create(scheduled=True)

    clock.advance(days=1)

    assert "1 published, 0 scheduled, 0 drafts" in run("--model", "testapp.Article")


def test_rejects_unknown_model():
    with pytest.raises(CommandError, match="Unknown model"):
        run("--model", "testapp.Missing")


def test_rejects_malformed_label():
    with pytest.raises(CommandError, match="Unknown model"):
        run("--model", "article")


def test_rejects_non_draftable_model():
    with pytest.raises(CommandError, match="not draftable"):
        run("--model", "testapp.Note")
