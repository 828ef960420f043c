#!/usr/bin/env python3
"""Run the feed aggregator API server."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from feed_aggregator.api.server import main


if __name__ == "__main__":
    main()
