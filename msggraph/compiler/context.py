"""
Run Context - The opaque value handed to every node and routing function.
The engine never inspects it; node functions use it to honor cancellation
and deadlines.
"""

import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field, PrivateAttr, field_validator


class RunContext(BaseModel):
    """Cancellation/deadline signal plus free-form metadata for one run."""

    run_id: str = Field(default_factory=lambda: f"run-{uuid.uuid4().hex[:8]}")
    deadline: Optional[datetime] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    _cancelled: threading.Event = PrivateAttr(default_factory=threading.Event)

    @field_validator("deadline")
    @classmethod
    def deadline_as_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        # Naive deadlines are taken to be UTC
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @classmethod
    def with_timeout(cls, seconds: float, **kwargs: Any) -> "RunContext":
        return cls(deadline=datetime.now(timezone.utc) + timedelta(seconds=seconds), **kwargs)

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and datetime.now(timezone.utc) >= self.deadline

    @property
    def done(self) -> bool:
        """True once the run was cancelled or its deadline passed."""
        return self.cancelled or self.expired
