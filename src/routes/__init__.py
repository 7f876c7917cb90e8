from .reviews import router as reviews_router
from .averages import router as averages_router
