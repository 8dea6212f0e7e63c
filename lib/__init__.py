# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - mongo_client.py: MongoDB client factory, collection names, indexes
# - geocoder.py: Address / postal code geocoding (MapQuest)
# - mailer.py: Outgoing email over SMTP
# - security.py: Password hashing, JWTs, reset tokens
# - seed.py: Sample data import / destroy
# - utils.py: Shared utilities (ObjectId parsing, serialization, slugs)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.mongo_client import MongoClientError, MongoClientFactory
from lib.utils import serialize_document, slugify, to_object_id

__all__ = [
    # MongoDB
    "MongoClientError",
    "MongoClientFactory",
    # Utils
    "serialize_document",
    "slugify",
    "to_object_id",
]
