from .research_service import ResearchService


__all__ = ["ResearchService"]
