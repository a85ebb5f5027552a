from datetime import datetime
from typing import Optional

from django.db import models
from django.db.models import Expression, Q, Value

from .clock import Clock


class ClockNow(Expression):
    """
    The clock's current instant, read when the SQL is compiled.

    A queryset built now and evaluated later compares against the time of
    evaluation, not the time it was built.
    """

    def __init__(self, model, clock: Optional[Clock] = None):
        super().__init__(output_field=models.DateTimeField())
        self.source_model = model
        self.clock = clock

    def now(self) -> datetime:
        clock = self.clock
        if clock is None:
            clock = self.source_model.get_draftable_clock()
        return clock.now()

    def as_sql(self, compiler, connection):
        return compiler.compile(Value(self.now(), output_field=self.output_field))


def published_q(now) -> Q:
    """Rows visible at ``now``; the boundary instant counts as published."""
    return Q(published_at__isnull=False, published_at__lte=now)


def drafts_q(now) -> Q:
    """Exact complement of ``published_q``."""
    return Q(published_at__isnull=True) | Q(published_at__gt=now)


def scheduled_q(now) -> Q:
    return Q(published_at__gt=now)


class DraftableQuerySet(models.QuerySet):
    """QuerySet with publish-state filters and bulk status changes"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._clock = None

    def _clone(self):
        clone = super()._clone()
        clone._clock = self._clock
        return clone

    def with_clock(self, clock: Optional[Clock]):
        """Evaluate publish state against ``clock`` instead of the model's."""
        clone = self._chain()
        clone._clock = clock
        return clone

    def _now(self, now: Optional[datetime] = None):
        if now is not None:
            return now
        return ClockNow(self.model, self._clock)

    def published(self, now: Optional[datetime] = None):
        """Return only published records"""
        return self.filter(published_q(self._now(now)))

    def drafts(self, now: Optional[datetime] = None):
        """Return drafts, scheduled ones included"""
        return self.filter(drafts_q(self._now(now)))

    def scheduled(self, now: Optional[datetime] = None):
        """Return records scheduled for future publication"""
        return self.filter(scheduled_q(self._now(now)))

    def publish(self, now: Optional[datetime] = None) -> int:
        """Publish every record in the queryset with a single UPDATE"""
        if now is None:
            now = self._now().now()
        return self.update(published_at=now)

    def draft(self) -> int:
        """Move every record in the queryset to draft with a single UPDATE"""
        return self.update(published_at=None)


class DraftableManager(models.Manager.from_queryset(DraftableQuerySet)):
    """
    Manager whose default queryset only holds published records.

    ``with_drafts()`` drops that filter and ``only_drafts()`` inverts it.
    The filters compare against the clock when the query runs. A manager
    built with its own ``clock`` hands it to every queryset it creates.
    """

    def __init__(self, clock: Optional[Clock] = None):
        super().__init__()
        self.clock = clock

    def with_drafts(self):
        """Return all records regardless of publish state"""
        return super().get_queryset().with_clock(self.clock)

    def get_queryset(self):
        """Return published records only"""
        return self.with_drafts().published()

    def only_drafts(self):
        """Return drafts only, scheduled ones included"""
        return self.with_drafts().drafts()

    def only_scheduled(self):
        """Return drafts that have a future publish date"""
        return self.with_drafts().scheduled()

    def drafts(self, now: Optional[datetime] = None):
        return self.with_drafts().drafts(now)

    def scheduled(self, now: Optional[datetime] = None):
        return self.with_drafts().scheduled(now)

    def publish(self, now: Optional[datetime] = None) -> int:
        """Publish every draft; published records keep their date"""
        qs = self.with_drafts()
        if now is None:
            now = qs._now().now()
        return qs.drafts(now).publish(now)

    def draft(self) -> int:
        """Move every record to draft"""
        return self.with_drafts().draft()
