from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.sismog.sismog.main import create_app


if __name__ == "__main__":
    create_app().run(host="127.0.0.1", port=5000)
