from .fake_source import ScriptedItemSource, make_item
from .metric_delta import metric_delta

HN_BASE_URL = "https://hacker-news.firebaseio.com/v0"

__all__ = ["HN_BASE_URL", "ScriptedItemSource", "make_item", "metric_delta"]
