import logging

from django.apps import AppConfig


logger = logging.getLogger(__name__)


class MarketplaceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "marketplace"
    verbose_name = "Marketplace"

    def ready(self):
        # Register event listeners
        try:
            from marketplace.infra.events.listeners import register_marketplace_listeners

            register_marketplace_listeners()
        except Exception as e:
            logger.error(f"Failed to register marketplace listeners: {e}")
