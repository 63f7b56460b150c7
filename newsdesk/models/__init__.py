from newsdesk.models.news import News, NewsStatus, TargetSite

__all__ = ["News", "NewsStatus", "TargetSite"]
