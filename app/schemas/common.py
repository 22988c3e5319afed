"""
Common Pydantic schemas
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for API payloads: snake_case in Python, camelCase on the wire"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(CamelModel):
    """Error response schema"""
    detail: str
    errors: dict[str, str] | None = None


class HealthResponse(BaseModel):
    status: str
    app: str
