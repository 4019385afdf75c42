import logging
from typing import Iterable, Mapping, Optional

from django.db import transaction

from .models import SINGLETON_ID, Profile, Skill

logger = logging.getLogger(__name__)


class ContentStore:
    """Store handle handed out per request.

    The Auth Gate binds it to the identity that authenticated the request;
    public handlers get an anonymous one. Single-row reads and writes go
    straight through the ORM in the views; the store owns the writes that
    touch a fixed row or more than one row.
    """

    def __init__(self, actor=None) -> None:
        self.actor = actor

    @property
    def actor_label(self) -> str:
        if self.actor is None:
            return "anonymous"
        return getattr(self.actor, "email", None) or str(getattr(self.actor, "id", self.actor))

    def get_singleton(self, model):
        return model.objects.filter(pk=SINGLETON_ID).first()

    def upsert_singleton(self, model, values: Mapping):
        """Insert or update the one row of ``model``; last writer wins."""
        instance, created = model.objects.update_or_create(pk=SINGLETON_ID, defaults=dict(values))
        logger.info(
            "%s %s by %s", model._meta.verbose_name, "created" if created else "updated", self.actor_label
        )
        return instance

    def swap_order(self, model, first_id, second_id, field: str = "display_order"):
        """Exchange ``field`` between two rows in a single transaction."""
        with transaction.atomic():
            rows = {
                row.pk: row
                for row in model.objects.select_for_update().filter(pk__in=[first_id, second_id])
            }
            if len(rows) != 2:
                raise model.DoesNotExist(f"{model.__name__} not found")
            first, second = rows[first_id], rows[second_id]
            first_value, second_value = getattr(first, field), getattr(second, field)
            model.objects.filter(pk=first.pk).update(**{field: second_value})
            model.objects.filter(pk=second.pk).update(**{field: first_value})
        logger.info(
            "%s %s swapped between %s and %s by %s",
            model.__name__,
            field,
            first_id,
            second_id,
            self.actor_label,
        )
        return first_value, second_value

    def reorder_skills(self, updates: Iterable[Mapping]) -> int:
        """Apply a batch of category/skill order changes, all or nothing.

        Entries naming an unknown id are skipped. Returns the number of rows
        written.
        """
        written = 0
        with transaction.atomic():
            for update in updates:
                values = {
                    name: update[name]
                    for name in ("category_order", "skill_order")
                    if update.get(name) is not None
                }
                if not values:
                    continue
                written += Skill.objects.filter(pk=update["id"]).update(**values)
        logger.info("reordered %d skills by %s", written, self.actor_label)
        return written

    def contact_recipient(self, fallback: Optional[str]) -> Optional[str]:
        """Profile email when set, else the configured fallback."""
        email = Profile.objects.filter(pk=SINGLETON_ID).values_list("email", flat=True).first()
        return email or fallback
