from dataclasses import dataclass, field


@dataclass(frozen=True)
class UploadedDocument:
    """An accepted image upload, ready to be sent to the model."""

    filename: str
    mime_type: str
    preview_data_url: str
    base64_payload: str
    raw_bytes: bytes = field(repr=False)

    @property
    def size_bytes(self) -> int:
        return len(self.raw_bytes)
