from django.conf import settings
from rest_framework.throttling import SimpleRateThrottle


class WindowRateThrottle(SimpleRateThrottle):
    """
    Fixed allowance of ``RATE_LIMIT_MAX`` requests per ``RATE_LIMIT_WINDOW_MS``.

    DRF rate strings only know second/minute/hour/day, so the window is taken
    straight from settings instead of being parsed from ``"100/15m"``.
    Authenticated users are keyed by id, anonymous clients by address.
    """

    scope = "api"

    def get_rate(self):
        return f"{settings.RATE_LIMIT_MAX}/{settings.RATE_LIMIT_WINDOW_MS}ms"

    def parse_rate(self, rate):
        return settings.RATE_LIMIT_MAX, max(1, settings.RATE_LIMIT_WINDOW_MS // 1000)

    def get_cache_key(self, request, view):
        if request.user and request.user.is_authenticated:
            ident = request.user.pk
        else:
            ident = self.get_ident(request)
        return self.cache_format % {"scope": self.scope, "ident": ident}
