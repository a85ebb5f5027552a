"""
Settings for the draftable app.

Projects configure the app through a single ``DRAFTABLE`` dict::

    DRAFTABLE = {
        "CLOCK": "draftable.clock.SystemClock",
    }
"""

import logging
from typing import Any, Dict

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.core.signals import setting_changed
from django.dispatch import receiver
from django.utils.module_loading import import_string

from .clock import Clock

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "CLOCK": "draftable.clock.SystemClock",
}


class DraftableSettings:
    """Lazy accessor for ``settings.DRAFTABLE`` with defaults."""

    def __init__(self, defaults=None):
        self.defaults = defaults or DEFAULTS
        self._cache: Dict[str, Any] = {}

    @property
    def user_settings(self) -> Dict[str, Any]:
        return getattr(settings, "DRAFTABLE", None) or {}

    def __getattr__(self, attr):
        if attr not in self.defaults:
            raise AttributeError(f"Invalid draftable setting: '{attr}'")

        if attr not in self._cache:
            self._cache[attr] = self.user_settings.get(attr, self.defaults[attr])
        return self._cache[attr]

    @property
    def clock(self) -> Clock:
        """The project default clock, resolved from ``CLOCK``."""
        if "_clock" not in self._cache:
            self._cache["_clock"] = self._resolve_clock(self.CLOCK)
        return self._cache["_clock"]

    def _resolve_clock(self, value) -> Clock:
        if isinstance(value, str):
            try:
                value = import_string(value)
            except ImportError as e:
                logger.error("Could not import DRAFTABLE['CLOCK'] %r: %s", value, e)
                raise ImproperlyConfigured(
                    f"DRAFTABLE['CLOCK'] refers to '{value}', which could not be imported"
                ) from e

        if isinstance(value, type):
            value = value()

        if not isinstance(value, Clock):
            logger.error("DRAFTABLE['CLOCK'] %r has no now() method", value)
            raise ImproperlyConfigured(
                "DRAFTABLE['CLOCK'] must be a clock class, instance or dotted path"
            )
        return value

    def reload(self):
        self._cache.clear()


draftable_settings = DraftableSettings()


@receiver(setting_changed)
def reload_draftable_settings(sender, setting, **kwargs):
    if setting == "DRAFTABLE":
        draftable_settings.reload()
