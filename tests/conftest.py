import os

# Tests log at INFO unless DEBUG is set explicitly
os.environ.setdefault("DEBUG", "false")

# Import signaling fixtures so they are available to all tests
from tests.fixtures.signaling_fixtures import *  # noqa: E402, F403
