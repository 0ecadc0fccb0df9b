"""
Storage 子系统：页面算术、分页流与只读流视图。

模块清单：
- paging: 页数计算与物理偏移换算
- msf_stream: 分页流（逻辑偏移到物理页的读取拼接）
- stream_file: 分页流的类文件视图
- errors: 异常体系
"""

from .errors import (
    InvalidPageSizeError,
    MsfStreamError,
    PageCountMismatchError,
    PageIndexError,
    PageSeekError,
    ShortReadError,
    StreamRangeError,
)
from .msf_stream import MsfStream
from .paging import page_count, page_offset
from .stream_file import MsfStreamFile

__all__ = [
    "InvalidPageSizeError",
    "MsfStream",
    "MsfStreamError",
    "MsfStreamFile",
    "PageCountMismatchError",
    "PageIndexError",
    "PageSeekError",
    "ShortReadError",
    "StreamRangeError",
    "page_count",
    "page_offset",
]
