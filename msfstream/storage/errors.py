"""
分页流的异常体系。

两类错误：
- 前置条件违规（调用方错误）：页大小非法、页号越界、读取范围越界
- I/O 失败：定位失败、文件提前结束导致的短读
"""

from typing import Optional


class MsfStreamError(Exception):
    """所有分页流异常的基类。"""
    pass


class InvalidPageSizeError(MsfStreamError, ValueError):
    """页大小必须为正整数。"""
    pass


class PageCountMismatchError(MsfStreamError, ValueError):
    """页号列表长度与 ceil(length / page_size) 不一致。"""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Stream requires {expected} page(s) but {actual} page index(es) were given")


class StreamRangeError(MsfStreamError, ValueError):
    """读取位置、长度或页内偏移超出允许范围。"""
    pass


class PageIndexError(MsfStreamError, IndexError):
    """逻辑页号不在 [0, page_count) 内，或物理页号超出 uint32 范围。"""
    pass


class PageSeekError(MsfStreamError, IOError):
    """无法将文件定位到目标物理偏移。"""

    def __init__(self, offset: int, position: Optional[int] = None):
        self.offset = offset
        self.position = position
        if position is None:
            msg = f"Failed to seek to physical offset {offset}"
        else:
            msg = f"Seek to physical offset {offset} landed at {position}"
        super().__init__(msg)


class ShortReadError(MsfStreamError, IOError):
    """文件在读满请求字节数之前结束。"""

    def __init__(self, offset: int, expected: int, actual: int):
        self.offset = offset
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Short read at physical offset {offset}: expected {expected} bytes, got {actual}"
        )
