from tortoise import fields

from scholar_assist.core.text import preview

from .base import UUIDModel


class KnowledgeEntry(UUIDModel):
    content = fields.TextField()
    metadata = fields.JSONField(default=dict)
    created_at = fields.DatetimeField(auto_now_add=True)

    @property
    def text_preview(self) -> str:
        return preview(self.content)

    class Meta:
        table = "knowledge_base"
        table_description = "Knowledge chunks used as chat context"
