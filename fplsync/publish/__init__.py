from .gist import GistPublisher, PublishResult

__all__ = ["GistPublisher", "PublishResult"]
