"""Deduplicating history of gadget run requests.

Two requests are the same entry when their identity fields (``image``
and ``params`` by default) are structurally equal. Re-adding an existing
entry moves it to the front and refreshes its timestamp while keeping
every other field of the stored record.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, JsonValue, ValidationError

from env_prefs.core.equality import deep_equal
from env_prefs.preferences.accessor import PreferenceAccessor

logger = logging.getLogger(__name__)

GADGET_HISTORY_KEY = "gadget-history"
DEFAULT_MAX_ENTRIES = 50
DEFAULT_IDENTITY_FIELDS = ("image", "params")

Timestamp = Union[int, float, str, None]


class GadgetRunRequest(BaseModel):
    """A past gadget run request.

    Unknown fields are kept so that metadata recorded by other callers
    survives a round trip through the history.
    """

    model_config = ConfigDict(extra="allow")

    image: str
    params: JsonValue = Field(default_factory=dict)
    timestamp: Timestamp = None

    def identity(self, fields: Sequence[str] = DEFAULT_IDENTITY_FIELDS) -> dict[str, Any]:
        """Values of the identity fields, as stored."""
        data = self.model_dump(mode="json")
        return {name: data.get(name) for name in fields}


def _coerce(record: Union[GadgetRunRequest, Mapping[str, Any]]) -> GadgetRunRequest:
    if isinstance(record, GadgetRunRequest):
        return record
    return GadgetRunRequest.model_validate(dict(record))


class History:
    """Capped, most-recent-first history of structured records."""

    def __init__(self, accessor: PreferenceAccessor):
        self.accessor = accessor

    def get_history(
        self, environment_id: str, history_key: str = GADGET_HISTORY_KEY
    ) -> List[GadgetRunRequest]:
        """Return stored records, most recent first.

        A stored value that is not a list reads as empty. Individual records
        that fail validation are skipped and the rest are kept.
        """
        raw = self.accessor.get(environment_id, history_key)
        if not isinstance(raw, list):
            if raw is not None:
                logger.debug(f"Ignoring malformed history {history_key} for {environment_id}")
            return []

        records = []
        for index, item in enumerate(raw):
            try:
                records.append(GadgetRunRequest.model_validate(item))
            except ValidationError:
                logger.debug(f"Skipping invalid record {index} in {history_key} for {environment_id}")
        return records

    def find(
        self,
        records: Sequence[GadgetRunRequest],
        record: GadgetRunRequest,
        identity_fields: Sequence[str] = DEFAULT_IDENTITY_FIELDS,
    ) -> Optional[int]:
        """Index of the first record with the same identity, or None."""
        wanted = record.identity(identity_fields)
        for index, item in enumerate(records):
            if deep_equal(item.identity(identity_fields), wanted):
                return index
        return None

    def add_record(
        self,
        environment_id: str,
        record: Optional[Union[GadgetRunRequest, Mapping[str, Any]]],
        history_key: str = GADGET_HISTORY_KEY,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        identity_fields: Sequence[str] = DEFAULT_IDENTITY_FIELDS,
    ) -> List[GadgetRunRequest]:
        """Insert ``record`` at the front of the history.

        If a record with the same identity exists it is moved to the front
        with only its timestamp replaced. The history is then truncated to
        ``max_entries``.

        Returns:
            The stored history.

        Raises:
            pydantic.ValidationError: If ``record`` is not a valid run request.
            PreferenceEncodeError: If the record cannot be serialized.
        """
        if not record:
            return self.get_history(environment_id, history_key)

        request = _coerce(record)
        history = self.get_history(environment_id, history_key)

        existing_index = self.find(history, request, identity_fields)
        if existing_index is not None:
            existing = history.pop(existing_index)
            request = existing.model_copy(update={"timestamp": request.timestamp})

        updated = [request, *history][:max_entries]
        self.accessor.set(
            environment_id,
            history_key,
            [item.model_dump(mode="json") for item in updated],
        )
        return updated

    def clear_history(self, environment_id: str, history_key: str = GADGET_HISTORY_KEY) -> None:
        self.accessor.set(environment_id, history_key, [])
