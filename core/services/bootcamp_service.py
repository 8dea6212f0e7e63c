# =============================================================================
# core/services/bootcamp_service.py - Bootcamp Business Logic
# =============================================================================
# Handles bootcamp CRUD, the one-bootcamp-per-publisher rule, radius search
# and photo uploads. Separates HTTP concerns from database/business logic.
# =============================================================================

import logging
from pathlib import Path
from typing import Any, Mapping

from bson import ObjectId
from pydantic.alias_generators import to_camel
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError, PyMongoError

from app.auth.models import AuthUser
from app.exceptions import BootcampAlreadyPublishedError, PhotoTooLargeError, UploadError
from core.models.bootcamp import BOOTCAMP_FILTER_FIELDS, BootcampBase, BootcampCreate, BootcampUpdate
from core.services.base import BaseService
from core.services.query import AdvancedQuery, Populate
from lib.geocoder import Geocoder
from lib.mongo_client import BOOTCAMP_OWNERS, BOOTCAMPS, COURSES, REVIEWS
from lib.utils import slugify, utcnow

logger = logging.getLogger(__name__)

# Radius of the Earth in miles; radius search distances are in miles
EARTH_RADIUS_MILES = 3963

DEFAULT_PHOTO = "no-photo.jpg"

COURSES_POPULATE = Populate(
    "courses",
    COURSES,
    local_field="_id",
    foreign_field="bootcamp",
    many=True,
)


def _editable_keys() -> list[str]:
    """Stored (camelCase) names of the fields a client may edit."""
    return [to_camel(name) for name in BootcampBase.model_fields]


class BootcampService(BaseService):
    """
    Service for bootcamp operations.

    Example:
        service = BootcampService(db, geocoder)
        bootcamp = service.create_bootcamp(BootcampCreate(...), actor=user)
    """

    collection_name = BOOTCAMPS
    resource_name = "Bootcamp"

    def __init__(self, db: Database, geocoder: Geocoder):
        super().__init__(db)
        self.geocoder = geocoder

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    def list_bootcamps(self, params: Mapping[str, str]) -> dict[str, Any]:
        """Advanced results over all bootcamps, each with its courses."""
        return AdvancedQuery(
            self.collection,
            BOOTCAMP_FILTER_FIELDS,
            populate=[COURSES_POPULATE],
        ).execute(params)

    def get_bootcamp(self, bootcamp_id: str) -> dict[str, Any]:
        """
        Get a bootcamp by ID.

        Raises:
            ResourceNotFoundError: If the bootcamp doesn't exist
        """
        return self.find_or_404(bootcamp_id)

    def bootcamps_in_radius(self, zipcode: str, distance: float) -> list[dict[str, Any]]:
        """
        Bootcamps within `distance` miles of a postal code.

        The distance is converted to radians (distance / Earth radius) for a
        $centerSphere containment query.
        """
        center = self.geocoder.geocode(zipcode)
        radius = distance / EARTH_RADIUS_MILES

        docs = list(self.collection.find({
            "location": {
                "$geoWithin": {
                    "$centerSphere": [[center.longitude, center.latitude], radius]
                }
            }
        }))
        logger.info(f"Found {len(docs)} bootcamps within {distance} miles of {zipcode}")
        return docs

    # -------------------------------------------------------------------------
    # Write
    # -------------------------------------------------------------------------

    def create_bootcamp(self, data: BootcampCreate, actor: AuthUser) -> dict[str, Any]:
        """
        Create a bootcamp owned by `actor`.

        Non-admins may own one bootcamp. The rule is enforced by claiming a
        unique per-user document with a conditional upsert before inserting,
        so concurrent creates by the same user cannot both succeed.

        Raises:
            BootcampAlreadyPublishedError: If a non-admin already owns one
            GeocodingError: If the address cannot be geocoded
        """
        doc = data.to_document()
        location = self.geocoder.geocode(doc.pop("address"))

        user_oid = ObjectId(actor.id)
        doc.update(
            slug=slugify(doc["name"]),
            location=location.to_geojson(),
            photo=DEFAULT_PHOTO,
            user=user_oid,
            createdAt=utcnow(),
        )

        claimed = False
        if not actor.is_admin:
            self._claim_ownership(user_oid)
            claimed = True

        try:
            result = self.collection.insert_one(doc)
        except PyMongoError:
            if claimed:
                self._release_ownership(user_oid)
            raise

        if claimed:
            self.db[BOOTCAMP_OWNERS].update_one(
                {"user": user_oid},
                {"$set": {"bootcamp": result.inserted_id}},
            )

        logger.info(f"Created bootcamp: {result.inserted_id} for user: {actor.id}")
        return doc

    def update_bootcamp(
        self,
        bootcamp_id: str,
        data: BootcampUpdate,
        actor: AuthUser,
    ) -> dict[str, Any]:
        """
        Update a bootcamp.

        The merged document is re-validated against BootcampBase so an update
        cannot leave the bootcamp in a state a create would reject.

        Raises:
            ResourceNotFoundError: If the bootcamp doesn't exist
            ForbiddenError: If the actor is not the owner or an admin
            pydantic.ValidationError: If the merged document is invalid
        """
        bootcamp = self.find_or_404(bootcamp_id)
        self.ensure_owner(bootcamp, actor, "update")

        changes = data.to_document(exclude_unset=True)
        if not changes:
            return bootcamp

        current = {key: bootcamp[key] for key in _editable_keys() if key in bootcamp}
        validated = BootcampBase.model_validate({**current, **changes}).to_document()
        update = {key: validated[key] for key in changes}

        address = update.pop("address", None)
        if address:
            update["location"] = self.geocoder.geocode(address).to_geojson()
        if "name" in update:
            update["slug"] = slugify(update["name"])
        if not update:
            return bootcamp

        updated = self.collection.find_one_and_update(
            {"_id": bootcamp["_id"]},
            {"$set": update},
            return_document=ReturnDocument.AFTER,
        )
        logger.info(f"Updated bootcamp: {bootcamp['_id']} ({', '.join(update)})")
        return updated

    def delete_bootcamp(self, bootcamp_id: str, actor: AuthUser) -> None:
        """
        Delete a bootcamp together with its courses and reviews.

        Also releases the owner's claim so they may publish another.
        """
        bootcamp = self.find_or_404(bootcamp_id)
        self.ensure_owner(bootcamp, actor, "delete")

        oid = bootcamp["_id"]
        courses = self.db[COURSES].delete_many({"bootcamp": oid}).deleted_count
        reviews = self.db[REVIEWS].delete_many({"bootcamp": oid}).deleted_count
        self.collection.delete_one({"_id": oid})
        self.db[BOOTCAMP_OWNERS].delete_many({"bootcamp": oid})

        logger.info(f"Deleted bootcamp: {oid} with {courses} courses and {reviews} reviews")

    def upload_photo(
        self,
        bootcamp_id: str,
        actor: AuthUser,
        filename: str,
        content_type: str | None,
        content: bytes,
        upload_dir: str,
        max_bytes: int,
    ) -> str:
        """
        Store a bootcamp photo as photo_<id><ext> and record the filename.

        Returns:
            The stored filename

        Raises:
            UploadError: Wrong MIME type, or the file could not be written
            PhotoTooLargeError: File larger than max_bytes
        """
        bootcamp = self.find_or_404(bootcamp_id)
        self.ensure_owner(bootcamp, actor, "update")

        if not content_type or not content_type.startswith("image"):
            raise UploadError("Please upload an image file")

        if len(content) > max_bytes:
            raise PhotoTooLargeError(max_bytes)

        stored_name = f"photo_{bootcamp['_id']}{Path(filename).suffix}"
        target_dir = Path(upload_dir)

        try:
            target_dir.mkdir(parents=True, exist_ok=True)
            (target_dir / stored_name).write_bytes(content)
        except OSError as e:
            logger.error(f"Failed to write photo {stored_name}: {e}")
            raise UploadError("Problem with file upload", status_code=500)

        self.collection.update_one({"_id": bootcamp["_id"]}, {"$set": {"photo": stored_name}})
        logger.info(f"Stored photo {stored_name} ({len(content)} bytes)")
        return stored_name

    # -------------------------------------------------------------------------
    # Ownership claims
    # -------------------------------------------------------------------------

    def _claim_ownership(self, user_oid: ObjectId) -> None:
        """
        Atomically claim the single bootcamp slot for a user.

        Raises:
            BootcampAlreadyPublishedError: If the slot is already taken
        """
        try:
            result = self.db[BOOTCAMP_OWNERS].update_one(
                {"user": user_oid},
                {"$setOnInsert": {"user": user_oid, "createdAt": utcnow()}},
                upsert=True,
            )
        except MongoDuplicateKeyError:
            # Lost a concurrent upsert race on the unique index
            raise BootcampAlreadyPublishedError(str(user_oid))

        if result.upserted_id is None:
            raise BootcampAlreadyPublishedError(str(user_oid))

    def _release_ownership(self, user_oid: ObjectId) -> None:
        self.db[BOOTCAMP_OWNERS].delete_one({"user": user_oid, "bootcamp": {"$exists": False}})
