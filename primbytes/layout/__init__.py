from .record import RecordLayout, LayoutField
from .loader import LayoutLoader

__all__ = ["RecordLayout",
           "LayoutField",
           "LayoutLoader"]
