# =============================================================================
# core/services/user_service.py - User Administration
# =============================================================================
# Admin-only user CRUD. Passwords are hashed before every write and the
# password/reset-token fields are stripped from everything returned.
# =============================================================================

import logging
from typing import Any, Mapping

from pymongo import ReturnDocument

from core.models.user import HIDDEN_USER_FIELDS, USER_FILTER_FIELDS, UserBase, UserCreate, UserUpdate
from core.services.base import BaseService
from core.services.query import AdvancedQuery
from lib.mongo_client import USERS
from lib.security import hash_password
from lib.utils import utcnow

logger = logging.getLogger(__name__)


def public_user(doc: dict[str, Any] | None) -> dict[str, Any] | None:
    """Copy of a user document without secret fields."""
    if doc is None:
        return None
    return {key: value for key, value in doc.items() if key not in HIDDEN_USER_FIELDS}


class UserService(BaseService):
    """Service for user administration."""

    collection_name = USERS
    resource_name = "User"

    def list_users(self, params: Mapping[str, str]) -> dict[str, Any]:
        return AdvancedQuery(
            self.collection,
            USER_FILTER_FIELDS,
            hidden_fields=HIDDEN_USER_FIELDS,
        ).execute(params)

    def get_user(self, user_id: str) -> dict[str, Any]:
        """
        Raises:
            ResourceNotFoundError: If the user doesn't exist
        """
        return public_user(self.find_or_404(user_id))

    def create_user(self, data: UserCreate) -> dict[str, Any]:
        """
        Create a user with a hashed password.

        Raises:
            pymongo.errors.DuplicateKeyError: If the email is taken
        """
        doc = data.to_document()
        doc["password"] = hash_password(doc["password"])
        doc["createdAt"] = utcnow()

        result = self.collection.insert_one(doc)
        logger.info(f"Created user: {result.inserted_id} ({doc['role']})")
        return public_user(doc)

    def update_user(self, user_id: str, data: UserUpdate) -> dict[str, Any]:
        """
        Update any user field; the merged profile is re-validated.

        Raises:
            ResourceNotFoundError: If the user doesn't exist
        """
        user = self.find_or_404(user_id)

        changes = data.to_document(exclude_unset=True)
        password = changes.pop("password", None)

        update: dict[str, Any] = {}
        if changes:
            current = {key: user[key] for key in UserBase.model_fields if key in user}
            validated = UserBase.model_validate({**current, **changes}).to_document()
            update = {key: validated[key] for key in changes}
        if password:
            update["password"] = hash_password(password)

        if not update:
            return public_user(user)

        updated = self.collection.find_one_and_update(
            {"_id": user["_id"]},
            {"$set": update},
            return_document=ReturnDocument.AFTER,
        )
        logger.info(f"Updated user: {user['_id']}")
        return public_user(updated)

    def delete_user(self, user_id: str) -> None:
        user = self.find_or_404(user_id, {"_id": 1})
        self.collection.delete_one({"_id": user["_id"]})
        logger.info(f"Deleted user: {user['_id']}")
