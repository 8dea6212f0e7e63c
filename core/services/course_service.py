# =============================================================================
# core/services/course_service.py - Course Business Logic
# =============================================================================
# Course CRUD. Every write recomputes the parent bootcamp's averageCost.
# =============================================================================

import logging
import math
from typing import Any, Mapping

from bson import ObjectId
from pydantic.alias_generators import to_camel
from pymongo import ReturnDocument

from app.auth.models import AuthUser
from app.exceptions import ForbiddenError, ResourceNotFoundError
from core.models.course import COURSE_FILTER_FIELDS, CourseBase, CourseUpdate
from core.services.base import BaseService
from core.services.query import AdvancedQuery, Populate, populate_documents
from lib.mongo_client import BOOTCAMPS, COURSES
from lib.utils import utcnow

logger = logging.getLogger(__name__)

BOOTCAMP_POPULATE = Populate("bootcamp", BOOTCAMPS, fields=("name", "description"))


class CourseService(BaseService):
    """Service for course operations."""

    collection_name = COURSES
    resource_name = "Course"

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    def list_courses(self, params: Mapping[str, str]) -> dict[str, Any]:
        """Advanced results over all courses with bootcamp name/description."""
        return AdvancedQuery(
            self.collection,
            COURSE_FILTER_FIELDS,
            populate=[BOOTCAMP_POPULATE],
        ).execute(params)

    def list_bootcamp_courses(self, bootcamp_id: str) -> list[dict[str, Any]]:
        """All courses of one bootcamp, oldest first."""
        oid = self.parse_id(bootcamp_id, "Bootcamp")
        return list(self.collection.find({"bootcamp": oid}).sort("createdAt", 1))

    def get_course(self, course_id: str) -> dict[str, Any]:
        """
        Get a course with its bootcamp populated.

        Raises:
            ResourceNotFoundError: If the course doesn't exist
        """
        course = self.find_or_404(course_id)
        return populate_documents(self.collection, [course], BOOTCAMP_POPULATE)[0]

    # -------------------------------------------------------------------------
    # Write
    # -------------------------------------------------------------------------

    def create_course(self, bootcamp_id: str, data: CourseBase, actor: AuthUser) -> dict[str, Any]:
        """
        Add a course to a bootcamp the actor owns.

        Raises:
            ResourceNotFoundError: If the bootcamp doesn't exist
            ForbiddenError: If the actor does not own the bootcamp
        """
        oid = self.parse_id(bootcamp_id, "Bootcamp")
        bootcamp = self.db[BOOTCAMPS].find_one({"_id": oid}, {"user": 1})
        if not bootcamp:
            raise ResourceNotFoundError(bootcamp_id, "Bootcamp")

        if not actor.is_admin and str(bootcamp.get("user")) != actor.id:
            logger.warning(f"User {actor.id} denied adding a course to bootcamp {bootcamp_id}")
            raise ForbiddenError(
                f"User {actor.id} is not authorized to add a course to bootcamp {bootcamp_id}"
            )

        doc = data.to_document()
        doc.update(bootcamp=oid, user=ObjectId(actor.id), createdAt=utcnow())
        result = self.collection.insert_one(doc)

        self.update_average_cost(oid)
        logger.info(f"Created course: {result.inserted_id} in bootcamp: {bootcamp_id}")
        return doc

    def update_course(self, course_id: str, data: CourseUpdate, actor: AuthUser) -> dict[str, Any]:
        """
        Update a course; the merged document is re-validated.

        Raises:
            ResourceNotFoundError: If the course doesn't exist
            ForbiddenError: If the actor is not the owner or an admin
        """
        course = self.find_or_404(course_id)
        self.ensure_owner(course, actor, "update")

        changes = data.to_document(exclude_unset=True)
        if not changes:
            return course

        current = {
            key: course[key]
            for key in (to_camel(name) for name in CourseBase.model_fields)
            if key in course
        }
        validated = CourseBase.model_validate({**current, **changes}).to_document()
        update = {key: validated[key] for key in changes}

        updated = self.collection.find_one_and_update(
            {"_id": course["_id"]},
            {"$set": update},
            return_document=ReturnDocument.AFTER,
        )
        if "tuition" in update:
            self.update_average_cost(course["bootcamp"])

        logger.info(f"Updated course: {course['_id']}")
        return updated

    def delete_course(self, course_id: str, actor: AuthUser) -> None:
        """Delete a course and refresh the bootcamp's average cost."""
        course = self.find_or_404(course_id)
        self.ensure_owner(course, actor, "delete")

        self.collection.delete_one({"_id": course["_id"]})
        self.update_average_cost(course["bootcamp"])
        logger.info(f"Deleted course: {course['_id']}")

    # -------------------------------------------------------------------------
    # Aggregates
    # -------------------------------------------------------------------------

    def update_average_cost(self, bootcamp_oid: ObjectId) -> int | None:
        """
        Recompute a bootcamp's averageCost from its courses.

        The mean tuition is rounded up to the next multiple of 10. A bootcamp
        with no courses has no averageCost.
        """
        pipeline = [
            {"$match": {"bootcamp": bootcamp_oid}},
            {"$group": {"_id": "$bootcamp", "averageCost": {"$avg": "$tuition"}}},
        ]
        result = list(self.collection.aggregate(pipeline))

        if result and result[0].get("averageCost") is not None:
            average = math.ceil(result[0]["averageCost"] / 10) * 10
            self.db[BOOTCAMPS].update_one({"_id": bootcamp_oid}, {"$set": {"averageCost": average}})
            return average

        self.db[BOOTCAMPS].update_one({"_id": bootcamp_oid}, {"$unset": {"averageCost": ""}})
        return None
