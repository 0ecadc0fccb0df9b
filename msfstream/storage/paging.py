"""
页面算术辅助函数。
"""

from .errors import InvalidPageSizeError, StreamRangeError


def page_count(page_size: int, length: int) -> int:
    """
    计算容纳 length 字节所需的页数（向上取整）。
    length 为 0 时返回 0。
    """
    if page_size <= 0:
        raise InvalidPageSizeError(f"Page size must be positive, got {page_size}")
    if length < 0:
        raise StreamRangeError(f"Length must be non-negative, got {length}")
    return (length + page_size - 1) // page_size


def page_offset(page_index: int, page_size: int) -> int:
    """根据物理页号计算文件内的字节偏移量 (页号从0开始)"""
    return page_index * page_size
