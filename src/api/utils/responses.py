"""Default response class, serializing with orjson.

Entity lists, contact confirmations and error envelopes all go through
``ORJSONResponse``. Keys keep their declaration order so entities read the
way their models are written. The client is created with ``tz_aware=True``,
so stored timestamps keep their UTC offset on the way out.
"""

from typing import Any

import orjson
from fastapi.responses import JSONResponse
from pydantic import BaseModel


class ORJSONResponse(JSONResponse):
    media_type = "application/json"

    def render(self, content: Any) -> bytes:
        """Serialize ``content``, dumping Pydantic models by alias."""
        if isinstance(content, BaseModel):
            content = content.model_dump(mode="json", by_alias=True)
        return orjson.dumps(content)
