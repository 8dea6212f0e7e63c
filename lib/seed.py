# =============================================================================
# lib/seed.py - Sample Data
# =============================================================================
# Deterministic sample users, bootcamps, courses and reviews. Bootcamp
# locations are stored pre-geocoded so radius searches over this data give
# the same answer every time, without calling the geocoder.
#
# Usage:
#   from lib.seed import import_data, destroy_data
#   import_data(db)
# =============================================================================

import logging
from datetime import timedelta
from typing import Any

from bson import ObjectId
from pymongo.database import Database

from core.services.course_service import CourseService
from core.services.review_service import ReviewService
from lib.mongo_client import BOOTCAMP_OWNERS, BOOTCAMPS, COURSES, REVIEWS, USERS
from lib.security import hash_password
from lib.utils import slugify, utcnow

logger = logging.getLogger(__name__)

SEED_PASSWORD = "123456"

# Postal code used as the center in radius examples, with its coordinates
SEED_CENTER_ZIPCODE = "02215"
SEED_CENTER = (-71.104028, 42.350846)

SEED_USERS: list[dict[str, Any]] = [
    {"_id": ObjectId("5c8a1d5b0190b214360dc031"), "name": "Admin Account", "email": "admin@gmail.com", "role": "admin"},
    {"_id": ObjectId("5c8a1d5b0190b214360dc032"), "name": "Publisher Account", "email": "publisher@gmail.com", "role": "publisher"},
    {"_id": ObjectId("5c8a1d5b0190b214360dc033"), "name": "User Account", "email": "user@gmail.com", "role": "user"},
    {"_id": ObjectId("5c8a1d5b0190b214360dc034"), "name": "John Doe", "email": "john@gmail.com", "role": "publisher"},
    {"_id": ObjectId("5c8a1d5b0190b214360dc035"), "name": "Kevin Webb", "email": "kevin@gmail.com", "role": "publisher"},
    {"_id": ObjectId("5c8a1d5b0190b214360dc036"), "name": "Mary Williams", "email": "mary@gmail.com", "role": "user"},
]


def _point(lng: float, lat: float, street: str, city: str, state: str, zipcode: str) -> dict[str, Any]:
    return {
        "type": "Point",
        "coordinates": [lng, lat],
        "formattedAddress": f"{street}, {city}, {state} {zipcode}, US",
        "street": street,
        "city": city,
        "state": state,
        "zipcode": zipcode,
        "country": "US",
    }


SEED_BOOTCAMPS: list[dict[str, Any]] = [
    {
        "_id": ObjectId("5d713995b721c3bb38c1f5d0"),
        "user": ObjectId("5c8a1d5b0190b214360dc032"),
        "name": "Devworks Bootcamp",
        "description": "Devworks is a full stack JavaScript Bootcamp located in the heart of Boston",
        "website": "https://devworks.com/",
        "phone": "(111) 111-1111",
        "email": "enroll@devworks.com",
        "location": _point(-71.104028, 42.350846, "233 Bay State Rd", "Boston", "MA", "02215"),
        "careers": ["Web Development", "UI/UX", "Business"],
        "housing": True,
        "jobAssistance": True,
        "jobGuarantee": False,
        "acceptGi": True,
    },
    {
        "_id": ObjectId("5d713a66ec8f2b88b8f830b8"),
        "user": ObjectId("5c8a1d5b0190b214360dc034"),
        "name": "ModernTech Bootcamp",
        "description": "ModernTech has one goal, and that is to make you a rockstar developer",
        "website": "https://moderntech.com/",
        "phone": "(222) 222-2222",
        "email": "enroll@moderntech.com",
        "location": _point(-71.324239, 42.639635, "220 Pawtucket St", "Lowell", "MA", "01854"),
        "careers": ["Web Development", "UI/UX", "Mobile Development"],
        "housing": False,
        "jobAssistance": True,
        "jobGuarantee": False,
        "acceptGi": True,
    },
    {
        "_id": ObjectId("5d725a037b292f5f8ceff787"),
        "user": ObjectId("5c8a1d5b0190b214360dc035"),
        "name": "Codemasters",
        "description": "Is coding your passion? Codemasters will give you the skills to succeed",
        "website": "https://codemasters.com/",
        "phone": "(333) 333-3333",
        "email": "enroll@codemasters.com",
        "location": _point(-71.525909, 41.482533, "45 Upper College Rd", "Kingston", "RI", "02881"),
        "careers": ["Web Development", "Data Science", "Business"],
        "housing": False,
        "jobAssistance": False,
        "jobGuarantee": False,
        "acceptGi": False,
    },
    {
        "_id": ObjectId("5d725a1b7b292f5f8ceff788"),
        "user": ObjectId("5c8a1d5b0190b214360dc031"),
        "name": "Devcentral Bootcamp",
        "description": "Is coding your passion? Devcentral will help you get there",
        "website": "https://devcentral.com/",
        "phone": "(444) 444-4444",
        "email": "enroll@devcentral.com",
        "location": _point(-122.419416, 37.774929, "1 Market St", "San Francisco", "CA", "94105"),
        "careers": ["Mobile Development", "Web Development", "Data Science", "Business"],
        "housing": False,
        "jobAssistance": True,
        "jobGuarantee": True,
        "acceptGi": True,
    },
]

SEED_COURSES: list[dict[str, Any]] = [
    {
        "title": "Front End Web Development",
        "description": "This course will provide you with all of the essentials to become a successful frontend web developer",
        "weeks": 8,
        "tuition": 8000,
        "minimumSkill": "beginner",
        "scholarshipAvailable": True,
        "bootcamp": ObjectId("5d713995b721c3bb38c1f5d0"),
        "user": ObjectId("5c8a1d5b0190b214360dc032"),
    },
    {
        "title": "Full Stack Web Development",
        "description": "In this course you will learn full stack web development, first learning all about the frontend",
        "weeks": 12,
        "tuition": 10000,
        "minimumSkill": "intermediate",
        "scholarshipAvailable": False,
        "bootcamp": ObjectId("5d713995b721c3bb38c1f5d0"),
        "user": ObjectId("5c8a1d5b0190b214360dc032"),
    },
    {
        "title": "Software QA",
        "description": "This course will teach you everything you need to know about quality assurance",
        "weeks": 10,
        "tuition": 5000,
        "minimumSkill": "intermediate",
        "scholarshipAvailable": False,
        "bootcamp": ObjectId("5d713a66ec8f2b88b8f830b8"),
        "user": ObjectId("5c8a1d5b0190b214360dc034"),
    },
    {
        "title": "Data Science Program",
        "description": "In this course you will learn Python for data science, machine learning and big data tools",
        "weeks": 10,
        "tuition": 12000,
        "minimumSkill": "intermediate",
        "scholarshipAvailable": False,
        "bootcamp": ObjectId("5d725a037b292f5f8ceff787"),
        "user": ObjectId("5c8a1d5b0190b214360dc035"),
    },
]

SEED_REVIEWS: list[dict[str, Any]] = [
    {
        "title": "Learned a ton!",
        "text": "I learned a lot at Devworks",
        "rating": 8,
        "bootcamp": ObjectId("5d713995b721c3bb38c1f5d0"),
        "user": ObjectId("5c8a1d5b0190b214360dc033"),
    },
    {
        "title": "Great bootcamp",
        "text": "Devworks prepared me for my first job",
        "rating": 10,
        "bootcamp": ObjectId("5d713995b721c3bb38c1f5d0"),
        "user": ObjectId("5c8a1d5b0190b214360dc036"),
    },
    {
        "title": "Got me a developer job",
        "text": "Codemasters helped me land a job",
        "rating": 7,
        "bootcamp": ObjectId("5d725a037b292f5f8ceff787"),
        "user": ObjectId("5c8a1d5b0190b214360dc033"),
    },
]


def import_data(db: Database) -> dict[str, int]:
    """
    Insert the sample data, including ownership claims and averages.

    createdAt values are spaced one minute apart so default sorting is stable.

    Returns:
        Number of documents inserted per collection
    """
    now = utcnow()
    password = hash_password(SEED_PASSWORD)

    users = [
        {**user, "password": password, "createdAt": now - timedelta(minutes=i)}
        for i, user in enumerate(SEED_USERS)
    ]
    bootcamps = [
        {**camp, "slug": slugify(camp["name"]), "photo": "no-photo.jpg", "createdAt": now - timedelta(minutes=i)}
        for i, camp in enumerate(SEED_BOOTCAMPS)
    ]
    courses = [{**course, "createdAt": now - timedelta(minutes=i)} for i, course in enumerate(SEED_COURSES)]
    reviews = [{**review, "createdAt": now - timedelta(minutes=i)} for i, review in enumerate(SEED_REVIEWS)]

    db[USERS].insert_many(users)
    db[BOOTCAMPS].insert_many(bootcamps)
    db[COURSES].insert_many(courses)
    db[REVIEWS].insert_many(reviews)

    admins = {user["_id"] for user in SEED_USERS if user["role"] == "admin"}
    claims = [
        {"user": camp["user"], "bootcamp": camp["_id"], "createdAt": now}
        for camp in SEED_BOOTCAMPS
        if camp["user"] not in admins
    ]
    if claims:
        db[BOOTCAMP_OWNERS].insert_many(claims)

    course_service = CourseService(db)
    review_service = ReviewService(db)
    for camp in SEED_BOOTCAMPS:
        course_service.update_average_cost(camp["_id"])
        review_service.update_average_rating(camp["_id"])

    counts = {
        USERS: len(users),
        BOOTCAMPS: len(bootcamps),
        COURSES: len(courses),
        REVIEWS: len(reviews),
    }
    logger.info(f"Imported sample data: {counts}")
    return counts


def destroy_data(db: Database) -> None:
    """Delete every document from the application collections."""
    for name in (USERS, BOOTCAMPS, COURSES, REVIEWS, BOOTCAMP_OWNERS):
        db[name].delete_many({})
    logger.info("Destroyed all data")
