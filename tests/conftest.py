"""Root pytest configuration for all tests."""

import logging

# atlassian-python-api logs at ERROR level for every non-2xx response, which
# is expected noise in tests that exercise 404 and rejection paths.
logging.getLogger("atlassian").setLevel(logging.WARNING)
