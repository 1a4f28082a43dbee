"""
ResearchService - Search, Compare, Analytics and Recommendations

Read-only decision support on top of the catalog. Query results are turned
into plain candidate dicts, scored with the helpers in ``scoring`` and
summarized; nothing here writes to the database.
"""

import logging
from typing import Dict, List, Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db.models import Count, F, Q
from django.utils import timezone

from authentication.infra.observability.tracing import tracer
from marketplace.cart.domain.models.cart import ITEM_TYPE_PRODUCT, ITEM_TYPE_SERVICE
from marketplace.catalog.domain.models.catalog import Product, Service
from marketplace.catalog.domain.models.interaction import Review
from marketplace.infra.observability.metrics import research_duration, research_queries_total
from marketplace.ordering.domain.models.order import Order, OrderItem
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

from . import scoring


User = get_user_model()
logger = logging.getLogger(__name__)

RECOMMENDATION_SIZE = 5
RECOMMENDATION_KINDS = {
    "all": (ITEM_TYPE_SERVICE, ITEM_TYPE_PRODUCT),
    "services": (ITEM_TYPE_SERVICE,),
    "products": (ITEM_TYPE_PRODUCT,),
}
ITEM_MODELS = {ITEM_TYPE_SERVICE: Service, ITEM_TYPE_PRODUCT: Product}


def _business(item):
    vendor = item.vendor
    if vendor is None:
        return None
    return getattr(vendor, "business", None)


def to_candidate(item) -> Dict:
    """Flatten a Service/Product row (with vendor business) into a JSON-ready dict."""
    business = _business(item)
    candidate = {
        "id": item.pk,
        "type": item.ITEM_TYPE,
        "name": item.name,
        "slug": item.slug,
        "description": item.description,
        "price": float(item.price),
        "rating": float(item.rating or 0),
        "review_count": item.review_count,
        "image": item.image,
        "category_id": item.category_id,
        "category_name": item.category.name,
        "category_slug": item.category.slug,
        "vendor_id": item.vendor_id,
        "vendor_name": business.business_name if business else None,
        "vendor_verified": bool(business and business.is_verified),
        "vendor_rating": float(business.rating) if business else 0.0,
        "vendor_reviews": business.review_count if business else 0,
    }
    if isinstance(item, Service):
        candidate["price_unit"] = item.price_unit
        candidate["duration_mins"] = item.duration_mins
    else:
        candidate["mrp"] = float(item.mrp) if item.mrp is not None else None
        candidate["stock"] = item.stock
        candidate["unit"] = item.unit
        candidate["is_featured"] = item.is_featured
        candidate["discount_percent"] = scoring.discount_percent(item.price, item.mrp)
    return candidate


class ResearchService(BaseService):
    """
    Service for research queries over services and products.

    Responsibilities:
    - Keyword research with relevance scoring, insights and buckets
    - Side-by-side comparison with a single recommended pick
    - Per-item review analytics and competitive position
    - Trending / new / personalized recommendations
    """

    def __init__(self):
        super().__init__()
        self.service_limit = getattr(settings, "RESEARCH_SERVICE_LIMIT", 10)
        self.product_limit = getattr(settings, "RESEARCH_PRODUCT_LIMIT", 20)
        self.compare_min = getattr(settings, "RESEARCH_COMPARE_MIN", 2)
        self.compare_max = getattr(settings, "RESEARCH_COMPARE_MAX", 5)
        self.top_rated_min = getattr(settings, "RESEARCH_TOP_RATED_MIN", 4.5)
        self.deal_min_discount = getattr(settings, "RESEARCH_BEST_DEAL_MIN_DISCOUNT", 10)
        self.trending_min_reviews = getattr(settings, "RESEARCH_TRENDING_MIN_REVIEWS", 5)
        self.review_window = getattr(settings, "RESEARCH_ANALYTICS_REVIEW_WINDOW", 100)
        self.service_weights = settings.RESEARCH_SERVICE_WEIGHTS
        self.product_weights = settings.RESEARCH_PRODUCT_WEIGHTS

    def _active(self, kind: str):
        return ITEM_MODELS[kind].objects.filter(is_active=True).select_related("category", "vendor__business")

    @staticmethod
    def _keyword_filter(query: str) -> Q:
        return Q(name__icontains=query) | Q(description__icontains=query) | Q(category__name__icontains=query)

    @staticmethod
    def _metadata(filters_applied: Dict) -> Dict:
        return {"timestamp": timezone.now().isoformat(), "filters_applied": filters_applied}

    # ------------------------------------------------------------------
    # Research
    # ------------------------------------------------------------------

    @BaseService.log_performance
    def research_services(self, query: str, budget=None, location: Optional[str] = None) -> ServiceResult[Dict]:
        """
        Keyword research over active services.

        Args:
            query: Matched against name, description and category name
            budget: Optional maximum price
            location: Echoed in the metadata only

        Returns:
            ServiceResult with ``{"query", "services", "insights", "search_metadata"}``

        Example:
            >>> result = research_service.research_services("plumb", budget=500)
            >>> result.value["insights"]["total_found"]
            3
        """
        query = (query or "").strip()
        if not query:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Search query is required")

        research_queries_total.labels(kind="services").inc()
        with research_duration.labels(kind="services").time(), tracer.start_as_current_span("research_services"):
            queryset = self._active(ITEM_TYPE_SERVICE).filter(self._keyword_filter(query))
            if budget is not None:
                queryset = queryset.filter(price__lte=budget)

            candidates = []
            for service in queryset:
                candidate = to_candidate(service)
                candidate["relevance_score"] = round(scoring.service_relevance(candidate, self.service_weights), 4)
                candidates.append(candidate)

            results = scoring.rank(candidates, lambda c: c["relevance_score"], self.service_limit)
            insights = scoring.service_insights(results)
            insights["recommendations"] = scoring.service_recommendations(results, self.top_rated_min)

        return service_ok(
            {
                "query": query,
                "services": results,
                "insights": insights,
                "search_metadata": self._metadata(
                    {"budget": budget if budget is not None else "none", "location": location or "all"}
                ),
            }
        )

    @BaseService.log_performance
    def research_products(self, query: str, min_price=None, max_price=None, min_rating=None) -> ServiceResult[Dict]:
        """
        Keyword research over active products with price and rating filters.

        Returns:
            ServiceResult with ``{"query", "products", "insights", "search_metadata"}``
        """
        query = (query or "").strip()
        if not query:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Search query is required")

        research_queries_total.labels(kind="products").inc()
        with research_duration.labels(kind="products").time(), tracer.start_as_current_span("research_products"):
            queryset = self._active(ITEM_TYPE_PRODUCT).filter(self._keyword_filter(query))
            if min_price is not None:
                queryset = queryset.filter(price__gte=min_price)
            if max_price is not None:
                queryset = queryset.filter(price__lte=max_price)
            if min_rating is not None:
                queryset = queryset.filter(rating__gte=min_rating)

            candidates = []
            for product in queryset:
                candidate = to_candidate(product)
                candidate["relevance_score"] = round(scoring.product_relevance(candidate, self.product_weights), 4)
                candidates.append(candidate)

            results = scoring.rank(candidates, lambda c: c["relevance_score"], self.product_limit)
            insights = scoring.product_insights(results)
            insights["recommendations"] = scoring.product_recommendations(
                results, self.top_rated_min, self.deal_min_discount, self.trending_min_reviews
            )

        filters_applied = {
            "min_price": min_price if min_price is not None else "none",
            "max_price": max_price if max_price is not None else "none",
            "min_rating": min_rating if min_rating is not None else "none",
        }
        return service_ok(
            {
                "query": query,
                "products": results,
                "insights": insights,
                "search_metadata": self._metadata(filters_applied),
            }
        )

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def _load_for_comparison(self, kind: str, ids) -> ServiceResult[List[Dict]]:
        label = f"{kind}s"
        if not isinstance(ids, (list, tuple)) or len(ids) < self.compare_min:
            return service_err(
                ErrorCodes.VALIDATION_ERROR, f"At least {self.compare_min} {kind} IDs required for comparison"
            )
        if len(ids) > self.compare_max:
            return service_err(
                ErrorCodes.VALIDATION_ERROR, f"Maximum {self.compare_max} {label} can be compared at once"
            )

        try:
            pks = [int(value) for value in ids]
        except (TypeError, ValueError):
            return service_err(ErrorCodes.VALIDATION_ERROR, f"All {kind} IDs must be valid numbers")

        rows = {item.pk: item for item in self._active(kind).filter(pk__in=pks)}
        # Keep the caller's order so ties favour the earlier ID
        candidates = []
        seen = set()
        for pk in pks:
            if pk in rows and pk not in seen:
                candidates.append(to_candidate(rows[pk]))
                seen.add(pk)

        if len(candidates) < self.compare_min:
            return service_err(ErrorCodes.NOT_FOUND, f"Not enough {label} found for comparison")
        return service_ok(candidates)

    @BaseService.log_performance
    def compare_services(self, service_ids) -> ServiceResult[Dict]:
        """
        Compare 2-5 services and recommend one.

        Example:
            >>> result = research_service.compare_services([4, 9])
            >>> result.value["recommendation"]["service_id"]
            9
        """
        loaded = self._load_for_comparison(ITEM_TYPE_SERVICE, service_ids)
        if not loaded.ok:
            return loaded
        candidates = loaded.value
        research_queries_total.labels(kind="compare_services").inc()

        for candidate in candidates:
            candidate["overall_score"] = round(scoring.service_compare_score(candidate), 4)
        best = scoring.pick_best(candidates, lambda c: c["overall_score"])

        return service_ok(
            {
                "services": candidates,
                "insights": scoring.comparison_insights(candidates),
                "recommendation": {
                    "service_id": best["id"],
                    "service_name": best["name"],
                    "reason": (
                        f"Best overall choice based on rating ({best['rating']}★), "
                        f"price (₹{best['price']:g}), and {best['review_count']} reviews"
                    ),
                },
            }
        )

    @BaseService.log_performance
    def compare_products(self, product_ids) -> ServiceResult[Dict]:
        """Compare 2-5 products and recommend the best value."""
        loaded = self._load_for_comparison(ITEM_TYPE_PRODUCT, product_ids)
        if not loaded.ok:
            return loaded
        candidates = loaded.value
        research_queries_total.labels(kind="compare_products").inc()

        for candidate in candidates:
            candidate["value_score"] = round(scoring.product_compare_score(candidate), 4)
        best = scoring.pick_best(candidates, lambda c: c["value_score"])

        return service_ok(
            {
                "products": candidates,
                "insights": scoring.comparison_insights(candidates, include_product_fields=True),
                "recommendation": {
                    "product_id": best["id"],
                    "product_name": best["name"],
                    "reason": (
                        f"Best value with {best['rating']}★ rating, {best['discount_percent']}% discount, "
                        f"and {best['review_count']} reviews"
                    ),
                },
            }
        )

    # ------------------------------------------------------------------
    # Analytics
    # ------------------------------------------------------------------

    @BaseService.log_performance
    def analytics(self, kind: str, item_id) -> ServiceResult[Dict]:
        """
        Review analytics and competitive position for one active item.

        Uses the latest reviews (bounded window) for the distribution and
        sentiment, and up to 5 best rated active siblings in the same category.
        """
        if kind not in ITEM_MODELS:
            return service_err(ErrorCodes.VALIDATION_ERROR, 'Type must be either "service" or "product"')

        try:
            item = self._active(kind).filter(pk=int(item_id)).first()
        except (TypeError, ValueError):
            item = None
        if item is None:
            return service_err(ErrorCodes.ITEM_NOT_FOUND, f"{kind.capitalize()} not found")

        research_queries_total.labels(kind="analytics").inc()
        candidate = to_candidate(item)

        ratings = list(
            Review.objects.filter(review_type=kind, item_id=item.pk)
            .order_by("-created_at", "-id")
            .values_list("rating", flat=True)[: self.review_window]
        )
        sibling_rows = (
            ITEM_MODELS[kind]
            .objects.filter(category_id=item.category_id, is_active=True)
            .exclude(pk=item.pk)
            .order_by("-rating", "id")
            .values("id", "name", "price", "rating", "review_count")[:5]
        )
        siblings = [{**row, "price": float(row["price"])} for row in sibling_rows]

        competitive = scoring.competitive_position(candidate["price"], candidate["rating"], siblings)
        competitive["related_items"] = siblings

        return service_ok(
            {
                "item": candidate,
                "performance": {
                    "rating_distribution": scoring.rating_distribution(ratings),
                    "avg_rating": candidate["rating"],
                    "total_reviews": len(ratings),
                    "verified_vendor": candidate["vendor_verified"],
                },
                "competitive_analysis": competitive,
                "sentiment_summary": scoring.sentiment_summary(ratings),
            }
        )

    # ------------------------------------------------------------------
    # Recommendations
    # ------------------------------------------------------------------

    def _purchase_history(self, user: User) -> List[Dict]:
        """Distinct purchased (item_type, item_id) with purchase counts, cancelled orders excluded."""
        return list(
            OrderItem.objects.filter(order__user=user)
            .exclude(order__status=Order.STATUS_CANCELLED)
            .values("item_type", "item_id")
            .annotate(purchase_count=Count("id"))
            .order_by("-purchase_count", "item_type", "item_id")
        )

    def _personalized(self, kind: str, history: List[Dict]) -> List[Dict]:
        bought_ids = [row["item_id"] for row in history if row["item_type"] == kind]
        if not bought_ids:
            return []

        model = ITEM_MODELS[kind]
        category_ids = set(model.objects.filter(pk__in=bought_ids).values_list("category_id", flat=True))
        queryset = (
            self._active(kind)
            .filter(category_id__in=category_ids)
            .exclude(pk__in=bought_ids)
            .order_by("-rating", "-review_count", "id")
        )
        return [to_candidate(item) for item in queryset[:RECOMMENDATION_SIZE]]

    @BaseService.log_performance
    def recommendations(self, user: User, kind: str = "all") -> ServiceResult[Dict]:
        """
        Trending, newest and history-based picks for ``user``.

        Args:
            user: Authenticated user
            kind: ``"all"``, ``"services"`` or ``"products"``
        """
        kinds = RECOMMENDATION_KINDS.get(kind or "all")
        if kinds is None:
            return service_err(ErrorCodes.VALIDATION_ERROR, 'Type must be "all", "services" or "products"')

        research_queries_total.labels(kind="recommendations").inc()
        history = self._purchase_history(user)
        recommendations = {"personalized": [], "trending": [], "new_arrivals": []}

        for item_kind in kinds:
            trending = (
                self._active(item_kind)
                .annotate(popularity=F("rating") * F("review_count"))
                .order_by("-popularity", "-rating", "id")
            )
            recommendations["trending"].extend(to_candidate(item) for item in trending[:RECOMMENDATION_SIZE])

            newest = self._active(item_kind).order_by("-created_at", "-id")
            recommendations["new_arrivals"].extend(to_candidate(item) for item in newest[:RECOMMENDATION_SIZE])

            recommendations["personalized"].extend(self._personalized(item_kind, history))

        return service_ok(
            {
                "recommendations": recommendations,
                "user_insights": {
                    "distinct_items_purchased": len(history),
                    "top_items": history[:3],
                },
            }
        )
