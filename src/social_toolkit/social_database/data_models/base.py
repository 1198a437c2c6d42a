"""
Shared pydantic base for every record and view exchanged with clients.

Fields are declared in snake_case and travel over the wire in camelCase
('sender_id' <-> 'senderId'), matching what the web and mobile clients expect.
Both spellings are accepted on input.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SocialModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready camelCase dict, as pushed over Socket.IO."""
        return self.model_dump(mode="json", by_alias=True)
