from .fetcher import Fetcher
from .models import FetchedDocument

__all__ = ["Fetcher", "FetchedDocument"]
