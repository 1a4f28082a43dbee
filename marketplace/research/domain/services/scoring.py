"""
Pure scoring and summary helpers for research results.

Every function works on plain candidate dicts (``price``, ``rating``,
``review_count``, ``vendor_verified`` ...) and never mutates its input.
Aggregates over an empty sequence are 0, never NaN.
"""

from typing import Callable, Dict, Iterable, List, Optional, Sequence


COMPARE_SERVICE_WEIGHTS = {"rating": 0.4, "verified": 20, "review_count": 0.1, "price": 100}
COMPARE_PRODUCT_WEIGHTS = {"rating": 0.3, "discount": 0.2, "verified": 20, "review_count": 0.1}


def mean(values: Iterable[float]) -> float:
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def discount_percent(price, mrp) -> float:
    """``(mrp - price) / mrp * 100`` rounded to 2 places; 0 without a positive MRP."""
    if not mrp or float(mrp) <= 0:
        return 0.0
    return round((float(mrp) - float(price)) / float(mrp) * 100, 2)


def service_relevance(candidate: Dict, weights: Dict) -> float:
    return (
        weights["rating"] * candidate["rating"]
        + weights["vendor_rating"] * (candidate.get("vendor_rating") or 0)
        + weights["review_count"] * candidate["review_count"]
        + weights["verified"] * int(bool(candidate.get("vendor_verified")))
    )


def product_relevance(candidate: Dict, weights: Dict) -> float:
    return (
        weights["rating"] * candidate["rating"]
        + weights["review_count"] * candidate["review_count"]
        + weights["verified"] * int(bool(candidate.get("vendor_verified")))
        + weights["featured"] * int(bool(candidate.get("is_featured")))
    )


def service_compare_score(candidate: Dict, weights: Dict = COMPARE_SERVICE_WEIGHTS) -> float:
    price = candidate["price"]
    price_term = weights["price"] / price if price > 0 else 0
    return (
        weights["rating"] * candidate["rating"]
        + weights["verified"] * int(bool(candidate.get("vendor_verified")))
        + weights["review_count"] * candidate["review_count"]
        + price_term
    )


def product_compare_score(candidate: Dict, weights: Dict = COMPARE_PRODUCT_WEIGHTS) -> float:
    return (
        weights["rating"] * candidate["rating"]
        + weights["discount"] * candidate.get("discount_percent", 0)
        + weights["verified"] * int(bool(candidate.get("vendor_verified")))
        + weights["review_count"] * candidate["review_count"]
    )


def value_ratio(candidate: Dict) -> float:
    """Rating per rupee; free items rank first."""
    if candidate["price"] <= 0:
        return float("inf")
    return candidate["rating"] / candidate["price"]


def rank(candidates: Sequence[Dict], key: Callable[[Dict], float], limit: Optional[int] = None) -> List[Dict]:
    """Sorted copy, highest ``key`` first; ties keep input order."""
    ranked = sorted(candidates, key=key, reverse=True)
    return ranked if limit is None else ranked[:limit]


def pick_best(candidates: Sequence[Dict], key: Callable[[Dict], float]) -> Optional[Dict]:
    """First candidate with the highest score."""
    best = None
    best_score = None
    for candidate in candidates:
        score = key(candidate)
        if best_score is None or score > best_score:
            best, best_score = candidate, score
    return best


def service_insights(candidates: Sequence[Dict]) -> Dict:
    return {
        "total_found": len(candidates),
        "avg_price": round(mean(c["price"] for c in candidates), 2),
        "avg_rating": round(mean(c["rating"] for c in candidates), 2),
        "verified_vendors": sum(1 for c in candidates if c.get("vendor_verified")),
    }


def product_insights(candidates: Sequence[Dict]) -> Dict:
    prices = [c["price"] for c in candidates]
    return {
        "total_found": len(candidates),
        "price_range": {
            "min": min(prices) if prices else 0,
            "max": max(prices) if prices else 0,
            "avg": round(mean(prices), 2),
        },
        "avg_rating": round(mean(c["rating"] for c in candidates), 2),
        "avg_discount": round(mean(c["discount_percent"] for c in candidates), 2),
        "verified_sellers": sum(1 for c in candidates if c.get("vendor_verified")),
    }


def service_recommendations(candidates: Sequence[Dict], top_rated_min: float, size: int = 3) -> List[Dict]:
    if not candidates:
        return []
    return [
        {
            "type": "top_rated",
            "title": "Highest Rated",
            "services": [c for c in candidates if c["rating"] >= top_rated_min][:size],
        },
        {"type": "best_value", "title": "Best Value for Money", "services": rank(candidates, value_ratio, size)},
        {
            "type": "most_trusted",
            "title": "Most Reviewed",
            "services": rank(candidates, lambda c: c["review_count"], size),
        },
    ]


def product_recommendations(
    candidates: Sequence[Dict], top_rated_min: float, deal_min_discount: float, trending_min_reviews: int, size: int = 3
) -> List[Dict]:
    if not candidates:
        return []
    deals = [c for c in candidates if c["discount_percent"] > deal_min_discount]
    popular = [c for c in candidates if c["review_count"] >= trending_min_reviews]
    return [
        {
            "type": "top_rated",
            "title": "Highest Rated Products",
            "products": [c for c in candidates if c["rating"] >= top_rated_min][:size],
        },
        {
            "type": "best_deals",
            "title": "Best Deals & Discounts",
            "products": rank(deals, lambda c: c["discount_percent"], size),
        },
        {"type": "trending", "title": "Most Popular", "products": rank(popular, lambda c: c["review_count"], size)},
    ]


def comparison_insights(candidates: Sequence[Dict], include_product_fields: bool = False) -> Dict:
    prices = [c["price"] for c in candidates]
    ratings = [c["rating"] for c in candidates]
    insights = {
        "price_comparison": {
            "lowest": min(prices) if prices else 0,
            "highest": max(prices) if prices else 0,
            "average": round(mean(prices), 2),
        },
        "rating_comparison": {
            "best": max(ratings) if ratings else 0,
            "lowest": min(ratings) if ratings else 0,
            "average": round(mean(ratings), 2),
        },
        "verified_vendors": sum(1 for c in candidates if c.get("vendor_verified")),
        "total_reviews": sum(c["review_count"] for c in candidates),
    }
    if include_product_fields:
        discounts = [c["discount_percent"] for c in candidates]
        insights["discount_comparison"] = {
            "best": max(discounts) if discounts else 0,
            "average": round(mean(discounts), 2),
        }
        insights["in_stock"] = sum(1 for c in candidates if c.get("stock", 0) > 0)
    return insights


def rating_distribution(ratings: Iterable[int]) -> Dict[int, int]:
    distribution = {star: 0 for star in range(5, 0, -1)}
    for rating in ratings:
        if rating in distribution:
            distribution[rating] += 1
    return distribution


def sentiment_summary(ratings: Iterable[int]) -> Dict[str, int]:
    summary = {"positive": 0, "neutral": 0, "negative": 0}
    for rating in ratings:
        if rating >= 4:
            summary["positive"] += 1
        elif rating == 3:
            summary["neutral"] += 1
        else:
            summary["negative"] += 1
    return summary


def competitive_position(price: float, rating: float, siblings: Sequence[Dict]) -> Dict:
    """1-based positions among siblings: cheapest first, best rated first. None without siblings."""
    if not siblings:
        return {"price_position": None, "rating_position": None}
    return {
        "price_position": 1 + sum(1 for s in siblings if s["price"] < price),
        "rating_position": 1 + sum(1 for s in siblings if s["rating"] > rating),
    }
