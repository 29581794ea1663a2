"""Unit test configuration.

Unit tests should be fast and isolated - no external dependencies.
"""

import pytest


pytestmark = pytest.mark.unit
