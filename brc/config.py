"""
Project configuration and versioning for the Bible Reader Core.
"""

__version__ = "0.1.0"
APP_NAME = "Bible Reader Core"

# Search
SEARCH_RESULT_LIMIT = 100
MIN_TOKEN_LENGTH = 3
STRIP_PUNCTUATION = True

# Remote verse API (bible-api.com)
REMOTE_API_URL = "https://bible-api.com"
REMOTE_TRANSLATION = "web"
REMOTE_TIMEOUT = 10.0

# Chapter window used when prefetching around the chapter being read
WINDOW_BEFORE = 2
WINDOW_AFTER = 2

# Phrase search over the chapters already loaded
MIN_PHRASE_LENGTH = 2
