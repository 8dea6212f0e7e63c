# =============================================================================
# app/context.py - Application Context
# =============================================================================
# Everything a request handler needs from the outside world, built once per
# application and stored on app.state.context:
# - settings: validated configuration
# - db: MongoDB database handle
# - geocoder: postal code / address -> coordinates
# - mailer: outgoing email
#
# Tests build their own context (in-memory database, fake geocoder) and pass
# it to create_app().
# =============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pymongo import MongoClient
from pymongo.database import Database

from app.config import Settings
from lib.geocoder import Geocoder, MapQuestGeocoder
from lib.mailer import Mailer
from lib.mongo_client import MongoClientFactory

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    settings: Settings
    db: Database
    geocoder: Geocoder
    mailer: Mailer
    client: MongoClient | None = field(default=None, repr=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> AppContext:
        """Build the production context: real MongoDB, MapQuest, SMTP."""
        client, db = MongoClientFactory.connect(settings.MONGO_URI, settings.MONGO_DB_NAME)
        geocoder = MapQuestGeocoder(
            api_key=settings.GEOCODER_API_KEY,
            url=settings.GEOCODER_URL,
            timeout=settings.GEOCODER_TIMEOUT,
        )
        mailer = Mailer(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USERNAME,
            password=settings.SMTP_PASSWORD,
            from_email=settings.FROM_EMAIL,
            from_name=settings.FROM_NAME,
        )
        return cls(settings=settings, db=db, geocoder=geocoder, mailer=mailer, client=client)

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
            logger.info("MongoDB client closed")
