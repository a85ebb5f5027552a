import logging

from django.apps import apps
from django.core.management.base import BaseCommand, CommandError

from draftable.managers import DraftableQuerySet
from draftable.models import DraftableMixin

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Report published, scheduled and draft counts for draftable models"

    def add_arguments(self, parser):
        parser.add_argument(
            "--model",
            action="append",
            dest="models",
            help="Limit the report to app_label.ModelName (repeatable)",
        )

    def get_models(self, labels):
        if not labels:
            return [
                model
                for model in apps.get_models()
                if issubclass(model, DraftableMixin)
            ]

        models = []
        for label in labels:
            try:
                model = apps.get_model(label)
            except (LookupError, ValueError) as e:
                raise CommandError(f"Unknown model '{label}'") from e

            if not issubclass(model, DraftableMixin):
                raise CommandError(f"Model '{label}' is not draftable")
            models.append(model)
        return models

    def handle(self, *args, **options):
        models = self.get_models(options["models"])

        if not models:
            self.stdout.write("No draftable models installed")
            return

        for model in models:
            now = model.get_draftable_clock().now()
            qs = DraftableQuerySet(model=model)

            published = qs.published(now).count()
            scheduled = qs.scheduled(now).count()
            drafts = qs.drafts(now).count()

            logger.info(
                "%s at %s: %d published, %d scheduled, %d drafts",
                model._meta.label,
                now.isoformat(),
                published,
                scheduled,
                drafts,
            )
            self.stdout.write(
                self.style.SUCCESS(f"{model._meta.label}")
                + f": {published} published, {scheduled} scheduled, {drafts} drafts"
            )
