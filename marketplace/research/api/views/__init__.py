from .research_views import ResearchViewSet


__all__ = ["ResearchViewSet"]
