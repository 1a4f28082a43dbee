"""
Dependency Injection Container
================================

Simple service locator pattern for wiring the marketplace domain services.
Services are created lazily and cached, so views share one instance of each
and tests can swap them with ``reset()``.

Usage:
    from infrastructure.container import container

    # In your view
    cart_service = container.cart_service()
    order_service = container.order_service()
"""

import logging
from typing import Optional

from .events import EventBus, get_event_bus


logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Service container for domain services and infrastructure dependencies.

    Implements lazy initialization and caching of service instances.
    Singleton pattern.
    """

    _instance: Optional["ServiceContainer"] = None
    _initialized: bool = False

    def __new__(cls):
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize container (only once)."""
        if not self._initialized:
            self._clear()
            self._initialized = True
            logger.info("Service container initialized")

    def _clear(self):
        self._event_bus: Optional[EventBus] = None

        # Domain Services
        self._inventory_service = None
        self._pricing_service = None
        self._cart_service = None
        self._order_service = None
        self._catalog_service = None
        self._review_service = None
        self._business_service = None
        self._research_service = None

    def event_bus(self) -> EventBus:
        """Get the process-wide event bus."""
        if self._event_bus is None:
            self._event_bus = get_event_bus()
        return self._event_bus

    def inventory_service(self):
        """Get InventoryService instance."""
        if self._inventory_service is None:
            from marketplace.cart.domain.services import InventoryService

            self._inventory_service = InventoryService()
            logger.debug("Created InventoryService")
        return self._inventory_service

    def pricing_service(self):
        """Get PricingService instance."""
        if self._pricing_service is None:
            from marketplace.cart.domain.services import PricingService

            self._pricing_service = PricingService()
            logger.debug("Created PricingService")
        return self._pricing_service

    def cart_service(self):
        """Get CartService instance."""
        if self._cart_service is None:
            from marketplace.cart.domain.services import CartService

            # CartService depends on InventoryService and PricingService
            self._cart_service = CartService(
                inventory_service=self.inventory_service(), pricing_service=self.pricing_service()
            )
            logger.debug("Created CartService")
        return self._cart_service

    def order_service(self):
        """Get OrderService instance."""
        if self._order_service is None:
            from marketplace.ordering.domain.services import OrderService

            self._order_service = OrderService(
                cart_service=self.cart_service(),
                inventory_service=self.inventory_service(),
                pricing_service=self.pricing_service(),
                event_bus=self.event_bus(),
            )
            logger.debug("Created OrderService")
        return self._order_service

    def catalog_service(self):
        """Get CatalogService instance."""
        if self._catalog_service is None:
            from marketplace.catalog.domain.services import CatalogService

            self._catalog_service = CatalogService()
            logger.debug("Created CatalogService")
        return self._catalog_service

    def review_service(self):
        """Get ReviewService instance."""
        if self._review_service is None:
            from marketplace.catalog.domain.services import ReviewService

            self._review_service = ReviewService(inventory_service=self.inventory_service())
            logger.debug("Created ReviewService")
        return self._review_service

    def business_service(self):
        """Get BusinessService instance."""
        if self._business_service is None:
            from marketplace.vendors.domain.services import BusinessService

            self._business_service = BusinessService()
            logger.debug("Created BusinessService")
        return self._business_service

    def research_service(self):
        """Get ResearchService instance."""
        if self._research_service is None:
            from marketplace.research.domain.services import ResearchService

            self._research_service = ResearchService()
            logger.debug("Created ResearchService")
        return self._research_service

    def reset(self):
        """
        Reset all cached service instances.

        Useful for testing or when switching between environments.
        """
        self._clear()
        logger.info("Service container reset")


# Global singleton instance
container = ServiceContainer()
