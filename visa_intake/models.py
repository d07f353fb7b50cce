from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Literal, Optional

# In-progress application record: field name -> submitted value
Draft = Dict[str, Any]

ApplicationType = Literal["new", "renewal"]


@dataclass(frozen=True)
class FileRef:
    """A picked file: display name plus the transient handle.

    Only ``name`` survives a reload; ``handle`` is whatever the file picker
    produced (a Streamlit ``UploadedFile`` in the app).
    """

    name: str
    handle: Optional[Any] = None

    @property
    def mime_type(self) -> str:
        return str(getattr(self.handle, "type", "") or "")

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")


class StepState(str, Enum):
    PRISTINE = "pristine"
    EDITING = "editing"
    SUBMITTING = "submitting"
    ADVANCED = "advanced"
