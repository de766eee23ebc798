"""
Client for the public bible-api.com verse service.

This is an alternate source of chapter text, used for bootstrapping or
cross-checking the local corpus. The core never calls it. Failures are
reported as warnings and produce None, matching how the reading UI
treats an unreachable service as "no content".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from . import config
from .util import info, warn


@dataclass
class RemotePassage:
    reference: str
    verses: List[Dict[str, Any]] = field(default_factory=list)

    def texts(self) -> List[str]:
        """Verse texts in order, trailing newlines removed."""
        return [str(v.get("text", "")).strip() for v in self.verses]


def passage_url(reference: str, translation: str = config.REMOTE_TRANSLATION) -> str:
    return f"{config.REMOTE_API_URL}/{quote(reference)}?translation={quote(translation)}"


def fetch_passage(
    reference: str,
    translation: str = config.REMOTE_TRANSLATION,
    session: Optional[requests.Session] = None,
    timeout: float = config.REMOTE_TIMEOUT,
) -> Optional[RemotePassage]:
    """
    GET a passage such as 'Genesis 1' or 'John 3:16'.

    Returns
    -------
    RemotePassage, or None when the request fails, the service answers
    with an error status, or the body is not the expected JSON.
    """
    url = passage_url(reference, translation)
    info(f"=== REMOTE === GET {url}")
    http = session or requests

    try:
        resp = http.get(url, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except requests.RequestException as e:
        warn(f"Remote verse request failed for {reference!r}: {e}")
        return None
    except ValueError as e:
        warn(f"Remote verse service returned invalid JSON for {reference!r}: {e}")
        return None

    if not isinstance(data, dict) or not isinstance(data.get("verses"), list):
        warn(f"Remote verse service returned no verses for {reference!r}.")
        return None

    passage = RemotePassage(reference=str(data.get("reference", reference)), verses=data["verses"])
    info(f"Remote passage {passage.reference!r}: {len(passage.verses)} verse(s).")
    return passage
