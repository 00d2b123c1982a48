from dataclasses import dataclass


@dataclass(frozen=True)
class InlineImage:
    """Image bytes sent inline with a model request."""

    mime_type: str
    base64_payload: str

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64_payload}"
