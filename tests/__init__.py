# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the DevCamper API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_query.py: Advanced results parsing and execution
# - test_security.py, test_utils.py, test_geocoder.py, test_mailer.py: lib/
# - test_auth.py, test_bootcamps.py, test_courses.py, test_reviews.py,
#   test_users.py, test_app.py: API integration tests (mongomock + TestClient)
# - test_radius.py: radius search (real MongoDB when MONGO_TEST_URI is set)
#
# Run tests with: pytest
# =============================================================================
