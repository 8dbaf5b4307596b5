import os
import sys
from pathlib import Path
from typing import Callable, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

# Widgets are created without a display server in CI.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from meshmap.models import NodeRecord  # noqa: E402


@pytest.fixture
def make_node() -> Callable[..., NodeRecord]:
    def _make(
        node_id: str,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        **kwargs,
    ) -> NodeRecord:
        return NodeRecord(node_id=node_id, latitude=latitude, longitude=longitude, **kwargs)

    return _make
