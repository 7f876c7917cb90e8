import os

from src.database.models import Base, Review, RatingSummary
from src.database.validators import reviews as reviews_validators

environment = os.getenv("ENVIRONMENT", "local")

if environment == "testing":
    from src.database.session_sqlite import get_sqlite_db as get_db
else:
    from src.database.session_postgresql import get_postgresql_db as get_db
