# Importing every model module registers all tables on the shared metadata
# before mappers are configured.
from apps.api import booking, parking, review, user  # noqa: F401
