# medlink/utils/pagination.py
# Keyset (cursor) 分頁的共用輔助函式
from typing import List, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")


def apply_keyset(stmt, model, cursor: Optional[int], limit: int):
    """
    在查詢上套用 keyset 分頁：
    - 依 created_at、id 由新到舊排序
    - cursor 為上一頁回傳的 next_cursor (該列會出現在本頁第一筆)
    - 多取一筆，用來判斷是否還有下一頁
    """
    if cursor is not None:
        stmt = stmt.where(model.id <= cursor)
    return (
        stmt.order_by(model.created_at.desc(), model.id.desc())
        .limit(limit + 1)
    )


def split_page(rows: Sequence[T], limit: int) -> Tuple[List[T], Optional[int]]:
    """
    將多取的那一筆切掉，回傳 (本頁資料, next_cursor)。
    next_cursor 是多出來那一筆的 id；沒有下一頁時為 None。
    """
    items = list(rows)
    next_cursor = None
    if len(items) > limit:
        next_item = items.pop()
        next_cursor = next_item.id
    return items, next_cursor
