# =============================================================================
# core/services/review_service.py - Review Business Logic
# =============================================================================
# Review CRUD. One review per (bootcamp, user) is enforced by a unique
# index; every write recomputes the bootcamp's averageRating.
# =============================================================================

import logging
from typing import Any, Mapping

from bson import ObjectId
from pydantic.alias_generators import to_camel
from pymongo import ReturnDocument

from app.auth.models import AuthUser
from app.exceptions import ResourceNotFoundError
from core.models.review import REVIEW_FILTER_FIELDS, ReviewBase, ReviewUpdate
from core.services.base import BaseService
from core.services.query import AdvancedQuery, Populate, populate_documents
from lib.mongo_client import BOOTCAMPS, REVIEWS
from lib.utils import utcnow

logger = logging.getLogger(__name__)

BOOTCAMP_POPULATE = Populate("bootcamp", BOOTCAMPS, fields=("name", "description"))


class ReviewService(BaseService):
    """Service for review operations."""

    collection_name = REVIEWS
    resource_name = "Review"

    def list_reviews(self, params: Mapping[str, str]) -> dict[str, Any]:
        """Advanced results over all reviews with bootcamp name/description."""
        return AdvancedQuery(
            self.collection,
            REVIEW_FILTER_FIELDS,
            populate=[BOOTCAMP_POPULATE],
        ).execute(params)

    def list_bootcamp_reviews(self, bootcamp_id: str) -> list[dict[str, Any]]:
        """All reviews of one bootcamp, newest first."""
        oid = self.parse_id(bootcamp_id, "Bootcamp")
        return list(self.collection.find({"bootcamp": oid}).sort("createdAt", -1))

    def get_review(self, review_id: str) -> dict[str, Any]:
        """
        Get a review with its bootcamp populated.

        Raises:
            ResourceNotFoundError: If the review doesn't exist
        """
        review = self.find_or_404(review_id)
        return populate_documents(self.collection, [review], BOOTCAMP_POPULATE)[0]

    def create_review(self, bootcamp_id: str, data: ReviewBase, actor: AuthUser) -> dict[str, Any]:
        """
        Add the actor's review to a bootcamp.

        Raises:
            ResourceNotFoundError: If the bootcamp doesn't exist
            pymongo.errors.DuplicateKeyError: If the actor already reviewed it
        """
        oid = self.parse_id(bootcamp_id, "Bootcamp")
        if not self.db[BOOTCAMPS].find_one({"_id": oid}, {"_id": 1}):
            raise ResourceNotFoundError(bootcamp_id, "Bootcamp")

        doc = data.to_document()
        doc.update(bootcamp=oid, user=ObjectId(actor.id), createdAt=utcnow())
        result = self.collection.insert_one(doc)

        self.update_average_rating(oid)
        logger.info(f"Created review: {result.inserted_id} for bootcamp: {bootcamp_id}")
        return doc

    def update_review(self, review_id: str, data: ReviewUpdate, actor: AuthUser) -> dict[str, Any]:
        """
        Update a review; only its author or an admin may.

        Raises:
            ResourceNotFoundError: If the review doesn't exist
            ForbiddenError: If the actor is not the author or an admin
        """
        review = self.find_or_404(review_id)
        self.ensure_owner(review, actor, "update")

        changes = data.to_document(exclude_unset=True)
        if not changes:
            return review

        current = {
            key: review[key]
            for key in (to_camel(name) for name in ReviewBase.model_fields)
            if key in review
        }
        validated = ReviewBase.model_validate({**current, **changes}).to_document()
        update = {key: validated[key] for key in changes}

        updated = self.collection.find_one_and_update(
            {"_id": review["_id"]},
            {"$set": update},
            return_document=ReturnDocument.AFTER,
        )
        if "rating" in update:
            self.update_average_rating(review["bootcamp"])

        logger.info(f"Updated review: {review['_id']}")
        return updated

    def delete_review(self, review_id: str, actor: AuthUser) -> None:
        review = self.find_or_404(review_id)
        self.ensure_owner(review, actor, "delete")

        self.collection.delete_one({"_id": review["_id"]})
        self.update_average_rating(review["bootcamp"])
        logger.info(f"Deleted review: {review['_id']}")

    def update_average_rating(self, bootcamp_oid: ObjectId) -> float | None:
        """Recompute a bootcamp's averageRating from its reviews."""
        pipeline = [
            {"$match": {"bootcamp": bootcamp_oid}},
            {"$group": {"_id": "$bootcamp", "averageRating": {"$avg": "$rating"}}},
        ]
        result = list(self.collection.aggregate(pipeline))

        if result and result[0].get("averageRating") is not None:
            average = round(result[0]["averageRating"], 1)
            self.db[BOOTCAMPS].update_one({"_id": bootcamp_oid}, {"$set": {"averageRating": average}})
            return average

        self.db[BOOTCAMPS].update_one({"_id": bootcamp_oid}, {"$unset": {"averageRating": ""}})
        return None
