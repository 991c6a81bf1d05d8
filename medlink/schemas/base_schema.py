# medlink/schemas/base_schema.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """
    所有 Schema 的基底：
    - 回應 JSON 使用 camelCase (firstName, nextCursor...)
    - 請求可使用 camelCase 或 snake_case
    - 可以直接從 ORM 物件建立
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
