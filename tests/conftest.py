"""
Pytest configuration and shared fixtures.
This file ensures the project root and the tests directory are in sys.path.
"""

import sys
from pathlib import Path

# Project root for app/domain/services imports; tests dir for test_fixtures
project_root = Path(__file__).parent.parent
for path in (project_root, Path(__file__).parent):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))
