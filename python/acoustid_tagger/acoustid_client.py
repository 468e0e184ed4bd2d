"""AcoustID web service client."""

from typing import List, Optional

import requests

from acoustid_tagger.config import DEFAULT_LOOKUP_URL, DEFAULT_TIMEOUT
from acoustid_tagger.errors import LookupServiceError
from acoustid_tagger.models import (
    Artist, LookupResponse, Recording, ReleaseGroup, Result
)


class AcoustIDClient:
    """Client for the AcoustID lookup API."""

    USER_AGENT = "AcoustIDTagger/1.0"
    META = "recordings releasegroups sources compress"

    def __init__(self, api_key: str, url: str = DEFAULT_LOOKUP_URL,
                 timeout: float = DEFAULT_TIMEOUT):
        """
        Initialize AcoustID client.

        Args:
            api_key: AcoustID application key
            url: Lookup endpoint
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": self.USER_AGENT})

    def lookup(self, duration: int, fingerprint: str) -> LookupResponse:
        """
        Look up a fingerprint.

        Args:
            duration: Length of the audio in seconds
            fingerprint: Chromaprint fingerprint from fpcalc

        Returns:
            Parsed LookupResponse

        Raises:
            LookupServiceError: On transport errors or a non-ok status.
        """
        form = {
            "client": self.api_key,
            "duration": str(duration),
            "meta": self.META,
            "fingerprint": fingerprint,
        }

        try:
            resp = self.session.post(self.url, data=form, timeout=self.timeout)
            data = resp.json()
        except requests.exceptions.RequestException as e:
            raise LookupServiceError(f"request failed: {e}") from e
        except ValueError as e:
            raise LookupServiceError(
                f"invalid JSON from AcoustID (HTTP {resp.status_code})"
            ) from e

        if not isinstance(data, dict):
            raise LookupServiceError("unexpected response from AcoustID")

        if data.get("status") != "ok":
            message = (data.get("error") or {}).get("message")
            raise LookupServiceError(message or f"lookup failed (HTTP {resp.status_code})")

        return self._parse_response(data)

    def _parse_response(self, data: dict) -> LookupResponse:
        """
        Parse AcoustID JSON into the lookup data model.

        Args:
            data: API response dictionary with status 'ok'

        Returns:
            LookupResponse preserving the service's ordering
        """
        results = []
        for result in data.get("results") or []:
            recordings = tuple(
                self._parse_recording(rec) for rec in result.get("recordings") or []
            )
            results.append(Result(
                score=float(result.get("score") or 0.0),
                recordings=recordings,
            ))
        return LookupResponse(results=tuple(results))

    def _parse_recording(self, rec: dict) -> Recording:
        """Parse one recording entry."""
        duration = rec.get("duration")
        return Recording(
            title=rec.get("title") or "",
            artists=self._parse_artists(rec.get("artists")),
            release_groups=tuple(
                ReleaseGroup(
                    type=group.get("type") or "",
                    title=group.get("title") or "",
                    secondary_types=tuple(group.get("secondarytypes") or []),
                    artists=self._parse_artists(group.get("artists")),
                )
                for group in rec.get("releasegroups") or []
            ),
            sources=int(rec.get("sources") or 0),
            duration=int(duration) if duration else None,
        )

    def _parse_artists(self, artists: Optional[List[dict]]) -> tuple:
        """Parse an artist credit list."""
        return tuple(
            Artist(
                id=a.get("id") or "",
                name=a.get("name") or "",
                join_phrase=a.get("joinphrase") or "",
            )
            for a in artists or []
        )
