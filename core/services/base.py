# =============================================================================
# core/services/base.py - Shared Service Helpers
# =============================================================================
# Lookup-or-404 and ownership checks used by every resource service.
# =============================================================================

import logging
from typing import Any

from bson import ObjectId
from pymongo.database import Database

from app.auth.models import AuthUser
from app.exceptions import ForbiddenError, ResourceNotFoundError
from lib.utils import to_object_id

logger = logging.getLogger(__name__)


class BaseService:
    """
    Base for services bound to one MongoDB database.

    Services are built per request from the AppContext, so they hold no
    state beyond the database handle.
    """

    collection_name: str = ""
    resource_name: str = "Resource"

    def __init__(self, db: Database):
        self.db = db
        self.collection = db[self.collection_name]

    def parse_id(self, resource_id: str, resource_name: str | None = None) -> ObjectId:
        """
        Parse an id from the URL.

        Raises:
            ResourceNotFoundError: If the id is not a valid ObjectId
        """
        oid = to_object_id(resource_id)
        if oid is None:
            raise ResourceNotFoundError(resource_id, resource_name or self.resource_name)
        return oid

    def find_or_404(self, resource_id: str, projection: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Fetch a document by id.

        Raises:
            ResourceNotFoundError: If the id is malformed or no document matches
        """
        doc = self.collection.find_one({"_id": self.parse_id(resource_id)}, projection)
        if not doc:
            raise ResourceNotFoundError(resource_id, self.resource_name)
        return doc

    def ensure_owner(self, doc: dict[str, Any], actor: AuthUser, action: str) -> None:
        """
        Allow the document's owner and admins through.

        Raises:
            ForbiddenError: If the actor neither owns the document nor is admin
        """
        if actor.is_admin or str(doc.get("user")) == actor.id:
            return
        logger.warning(f"User {actor.id} denied {action} on {self.resource_name} {doc.get('_id')}")
        raise ForbiddenError(
            f"User {actor.id} is not authorized to {action} this {self.resource_name.lower()}"
        )
