"""Django signals for cache invalidation and audit log immutability.

Cache keys are dropped after the surrounding transaction commits.
"""

from functools import partial

from django.db import transaction
from django.db.models.signals import post_delete, post_save, pre_delete, pre_save
from django.dispatch import receiver

from scheduling.cache import invalidate_event, invalidate_profile
from scheduling.domain.errors import ImmutableLogError
from scheduling.models import Event, EventAssignment, EventLog, Profile


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate caches when an event is saved or deleted."""
    transaction.on_commit(partial(invalidate_event, instance.pk))


@receiver([post_save], sender=Profile)
def invalidate_profile_cache(sender, instance, **kwargs):
    """Invalidate the profile list and every event payload naming the profile."""
    event_ids = set(
        EventAssignment.objects.filter(profile_id=instance.pk).values_list("event_id", flat=True)
    )
    event_ids.update(Event.objects.filter(created_by=instance.pk).values_list("id", flat=True))
    transaction.on_commit(partial(invalidate_profile, event_ids))


@receiver(pre_save, sender=EventLog)
def refuse_log_update(sender, instance, **kwargs):
    """Log entries are written once and never changed."""
    if not instance._state.adding:
        raise ImmutableLogError()


@receiver(pre_delete, sender=EventLog)
def refuse_log_delete(sender, instance, **kwargs):
    """Log entries are never deleted."""
    raise ImmutableLogError()
