"""
Path configuration for the Bible Reader Core.

BRC_CORPUS_PATH and BRC_CACHE_DIR override the defaults below.
"""

import os
from pathlib import Path

# Project root is one level up from brc/
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
CACHE_DIR = Path(os.environ.get("BRC_CACHE_DIR", PROJECT_ROOT / "cache"))

# Bundled corpus asset, and the working copy CachedAssetSource makes from it
ASSET_PATH = DATA_DIR / "en_kjv.json"
CORPUS_PATH = Path(os.environ.get("BRC_CORPUS_PATH", CACHE_DIR / "en_kjv.json"))
