"""Django signals for cache invalidation."""

from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from enrollments.cache import invalidate_training
from enrollments.models import Training


@receiver(pre_save, sender=Training)
def remember_previous_slug(sender, instance, **kwargs):
    """Keep the stored slug so a rename also drops the old slug key."""
    previous = sender.objects.filter(pk=instance.pk).values_list("slug", flat=True).first()
    instance._previous_slug = previous


@receiver([post_save, post_delete], sender=Training)
def invalidate_training_cache(sender, instance, **kwargs):
    """Invalidate caches when a training is saved or deleted."""
    slugs = (instance.slug, getattr(instance, "_previous_slug", None) or "")
    invalidate_training(str(instance.pk), slugs)
