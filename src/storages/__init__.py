from .interfaces import ReviewStoreInterface, SummaryStoreInterface
from .reviews import ReviewStore, SummaryStore
