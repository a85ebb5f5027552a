from rest_framework import serializers

"""Serializer support for draftable models."""


class DraftableSerializerMixin(serializers.Serializer):
    """
    Mixin for ModelSerializers of draftable models.

    Exposes the derived publish state read-only and accepts a write-only
    ``published`` flag. An explicit ``published_at`` in the same payload
    takes precedence over the flag.
    """

    is_published = serializers.SerializerMethodField()
    is_draft = serializers.SerializerMethodField()
    is_scheduled = serializers.SerializerMethodField()
    published = serializers.BooleanField(write_only=True, required=False)

    def get_is_published(self, obj) -> bool:
        return obj.is_published()

    def get_is_draft(self, obj) -> bool:
        return obj.is_draft()

    def get_is_scheduled(self, obj) -> bool:
        return obj.is_scheduled()

    def _apply_published_flag(self, validated_data, instance=None):
        published = validated_data.pop("published", None)
        if published is None or "published_at" in validated_data:
            return validated_data

        target = instance if instance is not None else self.Meta.model()
        target.set_published(published)
        validated_data["published_at"] = target.published_at
        return validated_data

    def create(self, validated_data):
        return super().create(self._apply_published_flag(validated_data))

    def update(self, instance, validated_data):
        return super().update(
            instance, self._apply_published_flag(validated_data, instance)
        )
