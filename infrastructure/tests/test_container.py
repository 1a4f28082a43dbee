"""
Service Container Tests
========================

Unit tests for dependency injection container.
"""

from unittest.mock import patch

from django.test import TestCase

from infrastructure.container import ServiceContainer, container
from infrastructure.events import EventBus, InMemoryEventBus
from marketplace.cart.domain.services import CartService, InventoryService, PricingService
from marketplace.catalog.domain.services import CatalogService, ReviewService
from marketplace.ordering.domain.services import OrderService
from marketplace.research.domain.services import ResearchService
from marketplace.vendors.domain.services import BusinessService


class ServiceContainerTest(TestCase):
    """Test ServiceContainer implementation."""

    def setUp(self):
        """Set up test fixtures."""
        # Reset container before each test
        container.reset()
        self.addCleanup(container.reset)

    def test_container_is_singleton(self):
        """Test that ServiceContainer is a singleton."""
        container1 = ServiceContainer()
        container2 = ServiceContainer()

        self.assertIs(container1, container2)
        self.assertIs(container1, container)

    def test_event_bus_defaults_to_memory(self):
        bus = container.event_bus()

        self.assertIsInstance(bus, EventBus)
        self.assertIsInstance(bus, InMemoryEventBus)
        self.assertIs(bus, container.event_bus())

    def test_services_are_cached(self):
        """Each accessor returns the same instance until reset."""
        accessors = {
            container.inventory_service: InventoryService,
            container.pricing_service: PricingService,
            container.cart_service: CartService,
            container.order_service: OrderService,
            container.catalog_service: CatalogService,
            container.review_service: ReviewService,
            container.business_service: BusinessService,
            container.research_service: ResearchService,
        }
        for accessor, service_class in accessors.items():
            service = accessor()
            self.assertIsInstance(service, service_class)
            self.assertIs(service, accessor())

    def test_order_service_shares_dependencies(self):
        """OrderService is wired with the container's own cart, inventory, pricing and bus."""
        order_service = container.order_service()

        self.assertIs(order_service.cart_service, container.cart_service())
        self.assertIs(order_service.inventory_service, container.inventory_service())
        self.assertIs(order_service.pricing_service, container.pricing_service())
        self.assertIs(order_service.event_bus, container.event_bus())

    def test_cart_and_review_share_inventory(self):
        inventory = container.inventory_service()

        self.assertIs(container.cart_service().inventory_service, inventory)
        self.assertIs(container.review_service().inventory_service, inventory)

    def test_reset_container(self):
        """Test resetting container clears cached instances."""
        order_service1 = container.order_service()
        cart_service1 = container.cart_service()

        container.reset()
        self.addCleanup(container.reset)

        self.assertIsNot(order_service1, container.order_service())
        self.assertIsNot(cart_service1, container.cart_service())

    @patch("infrastructure.container.get_event_bus")
    def test_event_bus_resolved_lazily(self, mock_get_event_bus):
        mock_get_event_bus.return_value = InMemoryEventBus()

        self.assertFalse(mock_get_event_bus.called)
        bus = container.event_bus()
        container.event_bus()

        mock_get_event_bus.assert_called_once()
        self.assertIs(bus, mock_get_event_bus.return_value)
