"""
Draftable model mixin.

A record is published once ``published_at`` is set and not after the
current clock instant. ``None`` keeps the record a draft indefinitely and a
future instant makes it a scheduled draft, which becomes published on read
once the clock passes that instant.
"""

import copy
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .clock import Clock
from .conf import draftable_settings
from .managers import DraftableManager

logger = logging.getLogger(__name__)


class DirtyTrackingMixin(models.Model):
    """
    Track unsaved changes by comparing field values to a snapshot.

    The snapshot holds the values last read from or written to the
    database. Records that were never saved have no snapshot, so every
    field counts as dirty.
    """

    class Meta:
        abstract = True

    def _concrete_values(self) -> Dict[str, Any]:
        # Deferred fields are not in __dict__ and stay out of the snapshot.
        return {
            field.attname: copy.deepcopy(self.__dict__[field.attname])
            for field in self._meta.concrete_fields
            if field.attname in self.__dict__
        }

    def _take_snapshot(self):
        self._persisted_values = self._concrete_values()

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        instance._take_snapshot()
        return instance

    def _update_snapshot(self, fields=None):
        if fields is None or getattr(self, "_persisted_values", None) is None:
            self._take_snapshot()
            return

        current = self._concrete_values()
        for name in fields:
            attname = self._meta.get_field(name).attname
            if attname in current:
                self._persisted_values[attname] = current[attname]

    def save(self, *args, **kwargs):
        super().save(*args, **kwargs)
        self._update_snapshot(kwargs.get("update_fields"))

    save.alters_data = True

    def refresh_from_db(self, using=None, fields=None, **kwargs):
        super().refresh_from_db(using=using, fields=fields, **kwargs)
        self._update_snapshot(fields)

    def get_dirty_fields(self) -> Dict[str, Any]:
        """Map each changed field to its persisted value (``None`` if unsaved)."""
        current = self._concrete_values()
        persisted = getattr(self, "_persisted_values", None)

        if self._state.adding or persisted is None:
            return {name: None for name in current}

        return {
            name: persisted.get(name)
            for name, value in current.items()
            if name not in persisted or persisted[name] != value
        }

    def is_dirty(self, *fields: str) -> bool:
        """True if any of ``fields`` (or any field at all) has unsaved changes."""
        dirty = self.get_dirty_fields()
        if not fields:
            return bool(dirty)

        names = {self._meta.get_field(name).attname for name in fields}
        return any(name in dirty for name in names)

    def is_clean(self, *fields: str) -> bool:
        return not self.is_dirty(*fields)


class DraftableMixin(DirtyTrackingMixin):
    """
    Adds draft / scheduled / published state to a model.

    ``objects`` only lists published records; use ``objects.with_drafts()``
    or ``objects.only_drafts()`` for the rest. Set ``draftable_clock`` on a
    subclass to evaluate its records against a specific clock.
    """

    published_at: models.DateTimeField = models.DateTimeField(
        _("published at"),
        null=True,
        blank=True,
        db_index=True,
        help_text=_("Leave empty to keep the record a draft"),
    )

    draftable_clock: Optional[Clock] = None

    objects = DraftableManager()

    class Meta:
        abstract = True

    @classmethod
    def get_draftable_clock(cls) -> Clock:
        if cls.draftable_clock is not None:
            return cls.draftable_clock
        return draftable_settings.clock

    def _now(self, now: Optional[datetime] = None) -> datetime:
        if now is not None:
            return now
        return self.get_draftable_clock().now()

    def is_published(self, now: Optional[datetime] = None) -> bool:
        if self.published_at is None:
            return False
        return self.published_at <= self._now(now)

    def is_draft(self, now: Optional[datetime] = None) -> bool:
        return not self.is_published(now)

    def is_scheduled(self, now: Optional[datetime] = None) -> bool:
        """True for drafts that will publish themselves at a future instant."""
        if self.published_at is None:
            return False
        return self.published_at > self._now(now)

    def set_published(self, value: bool):
        """Publish now or move back to draft, without saving."""
        self.published_at = self._now() if value else None

    def set_published_at(self, value):
        """
        Set the publish date without saving.

        ``None`` keeps the record a draft indefinitely. The value goes
        through the field's own conversion, so unparseable input raises
        ``ValidationError``.
        """
        value = self._meta.get_field("published_at").to_python(value)

        if (
            value is not None
            and settings.USE_TZ
            and timezone.is_naive(value)
        ):
            value = timezone.make_aware(value)

        self.published_at = value

    def publish(self, value: bool = True):
        """Publish (or, with ``False``, draft) and save. Returns the record."""
        self.set_published(value)
        self.save()
        logger.debug(
            "%s %s published_at set to %s",
            self._meta.label,
            self.pk,
            self.published_at,
        )
        return self

    def draft(self):
        return self.publish(False)

    def publish_at(self, value):
        """Schedule publication at ``value`` and save. Returns the record."""
        self.set_published_at(value)
        self.save()
        logger.debug(
            "%s %s scheduled for %s",
            self._meta.label,
            self.pk,
            self.published_at,
        )
        return self
