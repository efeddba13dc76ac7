"""Base reviewer implementing the Template Method pattern.

    review() → _call_api()   ← only this differs per provider
             → empty-response check

Subclasses implement two things only:
  - __init__: store credentials and the HTTP client
  - _call_api: make one raw API call and return the extracted text (or None)

A failed call is never retried: _call_api raises and the error propagates
to the caller unchanged.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from reviewbot_core.errors import EmptyResponseError

logger = logging.getLogger(__name__)


class BaseReviewer(ABC):
    PROVIDER_NAME: str = "model"

    def review(self, prompt: str) -> str:
        """Send the prompt and return the review text.

        Raises EmptyResponseError when the provider answered successfully but
        no text could be extracted from the response.
        """
        logger.debug("%s: sending prompt (%d characters)", self.__class__.__name__, len(prompt))
        text = self._call_api(prompt)
        if not text:
            raise EmptyResponseError(f"No review content received from {self.PROVIDER_NAME} API")
        return text

    @abstractmethod
    def _call_api(self, prompt: str) -> str | None:
        """Make a single API call and return the first text candidate.

        Should raise UpstreamAPIError on a failed call and return None when
        the response carries no text.
        """
