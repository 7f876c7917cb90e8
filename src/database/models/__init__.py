from .base import Base
from .reviews import Review, RatingSummary
