# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the domain logic behind the API:
# - models/: Pydantic schemas for request validation and Mongo documents
# - services/: Resource services and the advanced list query
# =============================================================================
