"""
Test suite for the Price Sheet Generator.

This package contains unit tests and end-to-end upload tests for the
spreadsheet -> price card grid pipeline.
"""

import sys
from pathlib import Path

# Add the project root to the Python path for imports
project_dir = Path(__file__).parent.parent
if str(project_dir) not in sys.path:
    sys.path.insert(0, str(project_dir))
