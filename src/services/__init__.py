from .aggregation import AverageAggregator
from .reviews import ReviewService, ReviewMutationResult
