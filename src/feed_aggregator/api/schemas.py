"""Request bodies for the JSON API.

Every field is optional at the schema level so that missing fields are
reported by the handlers as a uniform 400 rather than as a schema error.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..errors import ValidationError


class RequestBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def require(self, *fields: str) -> None:
        """Raise ValidationError naming any required field that is missing or empty."""
        missing = []
        for name in fields:
            value = getattr(self, name)
            if value is None or value == "":
                missing.append(type(self).model_fields[name].alias or name)
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")


class CategoryCreate(RequestBody):
    category_id: Optional[str] = Field(None, alias="categoryId")
    category_name: Optional[str] = Field(None, alias="categoryName")


class FeedCreate(RequestBody):
    category_id: Optional[str] = Field(None, alias="categoryId")
    feed_url: Optional[str] = Field(None, alias="feedUrl")
    feed_name: Optional[str] = Field(None, alias="feedName")
    category_name: Optional[str] = Field(None, alias="categoryName")


class FeedDelete(RequestBody):
    category_id: Optional[str] = Field(None, alias="categoryId")
    feed_url: Optional[str] = Field(None, alias="feedUrl")


class FeedToggle(RequestBody):
    category_id: Optional[str] = Field(None, alias="categoryId")
    feed_url: Optional[str] = Field(None, alias="feedUrl")
    enabled: Optional[bool] = None
