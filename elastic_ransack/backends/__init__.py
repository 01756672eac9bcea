# elastic_ransack/backends/__init__.py
from .base import Backend
from .elasticsearch import Elasticsearch

__all__ = ["Backend", "Elasticsearch"]
