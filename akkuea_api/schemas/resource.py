from dataclasses import dataclass, fields, replace
from datetime import datetime

from pydantic import BaseModel


@dataclass(frozen=True)
class ResourceFields:
    """The editable part of a resource, detached from the ORM row."""

    title: str
    content: str
    language: str
    format: str

    @classmethod
    def from_record(cls, record) -> 'ResourceFields':
        return cls(**{field.name: getattr(record, field.name) for field in fields(cls)})


@dataclass(frozen=True)
class ResourcePatch:
    """A partial update; ``None`` means the field is left untouched."""

    title: str | None = None
    content: str | None = None
    language: str | None = None
    format: str | None = None

    def provided(self) -> dict[str, str]:
        return {
            field.name: getattr(self, field.name)
            for field in fields(self)
            if getattr(self, field.name) is not None
        }

    def is_empty(self) -> bool:
        return not self.provided()


def apply_patch(current: ResourceFields, patch: ResourcePatch) -> ResourceFields:
    return replace(current, **patch.provided())


class UpdateResourceRequest(BaseModel):
    title: str | None = None
    content: str | None = None
    language: str | None = None
    format: str | None = None

    def to_patch(self) -> ResourcePatch:
        return ResourcePatch(
            title=self.title,
            content=self.content,
            language=self.language,
            format=self.format,
        )


class ResourceResponse(BaseModel):
    id: int
    title: str
    content: str
    language: str
    format: str
    creator_id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
