from django.core.signals import setting_changed
from django.dispatch import receiver

from .store import clear_store_cache


@receiver(setting_changed)
def reset_entity_store(sender, setting, **kwargs):
    """
    Rebuild the store after ENTITY_STORE_BACKEND is overridden (tests).
    """
    if setting == 'ENTITY_STORE_BACKEND':
        clear_store_cache()
