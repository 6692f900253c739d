"""Unit test configuration.

Unit tests run against an in-memory SQLite database and never reach a real mail
server or PostgreSQL.
"""

import pytest


# Mark all tests in this directory as unit tests
pytestmark = pytest.mark.unit
