"""Normalized Postman Collection v2.1 models.

Collections are decoded permissively: unknown fields are ignored, missing
fields take defaults and values of the wrong shape are dropped instead of
failing, so any decoded JSON value yields a usable tree.
"""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, model_validator


def _text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, dict):
        # v2.1 description objects: {"content": "...", "type": "text/markdown"}
        return _text(value.get("content"))
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    return None


def _key(value: Any) -> str:
    return _text(value) or ""


def _records(value: Any) -> list[dict]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]


def _records_or_none(value: Any) -> list[dict] | None:
    if not isinstance(value, list):
        return None
    return _records(value)


def _segments(value: Any) -> list[str] | None:
    if not isinstance(value, list):
        return None
    return [s for s in (_text(v) for v in value) if s is not None]


Text = Annotated[str | None, BeforeValidator(_text)]
Key = Annotated[str, BeforeValidator(_key)]


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: Any) -> Any:
        return data if isinstance(data, dict) else {}


class KeyValue(_Lenient):
    """A query parameter, header or form field."""

    key: Key = ""
    value: Any = None
    description: Text = None


class PostmanUrl(_Lenient):
    raw: Text = None
    path: Annotated[list[str] | None, BeforeValidator(_segments)] = None
    query: Annotated[list[KeyValue], BeforeValidator(_records)] = []

    @model_validator(mode="before")
    @classmethod
    def _coerce(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"raw": data}
        return data if isinstance(data, dict) else {}


class PostmanBody(_Lenient):
    mode: Text = None
    raw: Text = None
    formdata: Annotated[list[KeyValue] | None, BeforeValidator(_records_or_none)] = None


class PostmanRequest(_Lenient):
    url: PostmanUrl | None = None
    method: Text = None
    description: Text = None
    header: Annotated[list[KeyValue], BeforeValidator(_records)] = []
    body: PostmanBody | None = None


class PostmanItem(_Lenient):
    """A request item, a folder, or (rarely) both at once."""

    name: Text = None
    description: Text = None
    request: PostmanRequest | None = None
    item: Annotated[list["PostmanItem"] | None, BeforeValidator(_records_or_none)] = None

    @property
    def is_request(self) -> bool:
        return self.request is not None

    @property
    def is_folder(self) -> bool:
        return self.item is not None


class PostmanInfo(_Lenient):
    name: Text = None
    description: Text = None
    postman_id: Text = Field(None, alias="_postman_id")
    schema_url: Text = Field(None, alias="schema")


class PostmanCollection(_Lenient):
    info: PostmanInfo = Field(default_factory=PostmanInfo)
    item: Annotated[list[PostmanItem], BeforeValidator(_records)] = []


PostmanItem.model_rebuild()
