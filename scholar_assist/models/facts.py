from tortoise import fields

from .base import TimestampedModel


class Scholarship(TimestampedModel):
    name = fields.CharField(max_length=255)
    deadline = fields.CharField(max_length=100, null=True)
    amount = fields.CharField(max_length=100, null=True)
    description = fields.TextField(null=True)
    eligibility = fields.TextField(null=True)
    link = fields.CharField(max_length=500, null=True)
    category = fields.CharField(max_length=50, null=True)

    class Meta:
        table = "scholarships"


class Resource(TimestampedModel):
    title = fields.CharField(max_length=255)
    type = fields.CharField(max_length=50)
    link = fields.CharField(max_length=500)
    description = fields.TextField(null=True)

    class Meta:
        table = "resources"
