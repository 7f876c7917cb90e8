from .settings import BaseAppSettings
from .dependencies import (
    get_settings,
    get_jwt_auth_manager,
    get_current_user_id,
)
