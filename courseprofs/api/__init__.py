# courseprofs/api/__init__.py

from . import course
from . import professor
from . import review

__all__ = ["course", "professor", "review"]
