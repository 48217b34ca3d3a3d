"""Root conftest.py: puts the src layout on the path for test collection.

With the package installed (``pip install -e .``) this is a no-op.
"""

import sys
from pathlib import Path

_SRC_PATH = str(Path(__file__).parent / "src")
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)
