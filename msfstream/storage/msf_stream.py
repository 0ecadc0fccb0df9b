"""
MSF 分页流。

一个流由若干固定大小的物理页组成，这些页在容器文件中不必连续，也不必递增。
MsfStream 把逻辑偏移翻译为物理页读取，使整个流看起来是一段连续的字节。

约定：
- 文件句柄在每次调用时传入，流对象不持有、不关闭句柄
- 读取会改变文件的当前位置，且不会恢复
- 多个流共享同一句柄时，由调用方负责串行化访问
"""

import struct
from array import array
from typing import BinaryIO, Iterable, Iterator, Optional, Tuple, Union, TYPE_CHECKING

from loguru import logger

from msfstream.config import PAGE_INDEX_FORMAT, UINT32_MAX
from .errors import (
    PageCountMismatchError,
    PageIndexError,
    PageSeekError,
    ShortReadError,
    StreamRangeError,
)
from .paging import page_count, page_offset

if TYPE_CHECKING:
    from .stream_file import MsfStreamFile

Buffer = Union[bytearray, memoryview, array]

# 页号以 4 字节无符号整数存储
_PAGE_TYPECODE = 'I'
_PAGE_INDEX_STRUCT = struct.Struct(PAGE_INDEX_FORMAT)


def _writable_view(buf: Buffer, length: int) -> memoryview:
    view = memoryview(buf)
    if view.readonly:
        raise TypeError("Destination buffer must be writable")
    view = view.cast('B')
    if len(view) < length:
        raise StreamRangeError(f"Destination buffer holds {len(view)} bytes, {length} required")
    return view


def _require_int(**values: int) -> None:
    for name, value in values.items():
        if not isinstance(value, int):
            raise StreamRangeError(f"{name} must be an int, got {type(value).__name__}")


def _readinto(f: BinaryIO, view: memoryview) -> int:
    readinto = getattr(f, 'readinto', None)
    if readinto is not None:
        return readinto(view) or 0
    data = f.read(len(view))
    view[:len(data)] = data
    return len(data)


def _read_at(f: BinaryIO, offset: int, view: memoryview) -> None:
    """
    定位到物理偏移 offset，读满 len(view) 字节。
    原始文件可能一次只返回部分数据，因此循环直到读满或遇到 EOF。
    """
    expected = len(view)
    try:
        position = f.seek(offset)
    except OSError as e:
        raise PageSeekError(offset) from e
    if position is not None and position != offset:
        raise PageSeekError(offset, position)
    got = 0
    while got < expected:
        n = _readinto(f, view[got:])
        if n == 0:
            break
        got += n
    if got < expected:
        raise ShortReadError(offset, expected, got)
    logger.debug(f"物理读取: offset={offset} size={expected}")


class MsfStream:
    """
    MSF 流，由 1 个或多个页组成。
    屏蔽跨页读取的细节，使流的数据看起来是连续的。
    构造后不可变：页大小、长度和页号列表都不会再改变。
    """
    __slots__ = ('_page_size', '_length', '_pages')

    def __init__(self, page_size: int, length: int, pages: Iterable[int]) -> None:
        """
        :param page_size: 单页字节数
        :param length: 流的字节长度
        :param pages: 物理页号列表，长度必须等于 page_count(page_size, length)。
                      会被复制到流自己的存储中，之后修改原列表不影响本流。
        """
        expected = page_count(page_size, length)
        # 先转为列表：bytes/bytearray 直接传给 array() 会被当作机器字节解释
        indices = list(pages)
        for index in indices:
            if not isinstance(index, int):
                raise TypeError(f"Physical page index must be an int, got {type(index).__name__}")
            if not 0 <= index <= UINT32_MAX:
                raise PageIndexError(f"Physical page index {index} out of uint32 range")
        owned = array(_PAGE_TYPECODE, indices)
        if len(owned) != expected:
            raise PageCountMismatchError(expected, len(owned))
        self._page_size = page_size
        self._length = length
        self._pages = owned
        logger.debug(f"MsfStream 构造: page_size={page_size} length={length} pages={len(owned)}")

    @classmethod
    def from_buffer(cls, page_size: int, length: int, data: bytes, offset: int = 0) -> 'MsfStream':
        """
        从目录流的原始字节中解析页号列表（小端 uint32）并构造流。
        """
        count = page_count(page_size, length)
        size = count * _PAGE_INDEX_STRUCT.size
        if offset < 0 or offset + size > len(data):
            raise StreamRangeError(
                f"Page index table of {size} bytes at offset {offset} exceeds buffer of {len(data)} bytes"
            )
        pages = [index for (index,) in _PAGE_INDEX_STRUCT.iter_unpack(data[offset:offset + size])]
        return cls(page_size, length, pages)

    @property
    def length(self) -> int:
        """流的字节长度。"""
        return self._length

    @property
    def page_size(self) -> int:
        """单页字节数。"""
        return self._page_size

    @property
    def page_count(self) -> int:
        """流占用的页数。"""
        return len(self._pages)

    @property
    def pages(self) -> Tuple[int, ...]:
        """物理页号的只读副本。"""
        return tuple(self._pages)

    def __len__(self) -> int:
        return self._length

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MsfStream):
            return NotImplemented
        return (self._page_size, self._length, self._pages) == (other._page_size, other._length, other._pages)

    def __hash__(self) -> int:
        return hash((self._page_size, self._length, tuple(self._pages)))

    def __repr__(self) -> str:
        return f"<MsfStream page_size={self._page_size} length={self._length} pages={list(self._pages)}>"

    def physical_offset(self, page: int) -> int:
        """逻辑页 page 在容器文件中的字节偏移。"""
        self._check_page(page)
        return page_offset(self._pages[page], self._page_size)

    def _check_page(self, page: int) -> None:
        _require_int(page=page)
        if not 0 <= page < len(self._pages):
            raise PageIndexError(f"Page {page} out of range [0, {len(self._pages)})")

    def _check_range(self, pos: int, length: int) -> None:
        _require_int(pos=pos, length=length)
        if pos < 0 or length < 0:
            raise StreamRangeError(f"Position and length must be non-negative (pos={pos}, length={length})")
        if pos + length > self._length:
            raise StreamRangeError(
                f"Read of {length} bytes at position {pos} exceeds stream length {self._length}"
            )

    def read_from_page(self, f: BinaryIO, page: int, length: int,
                       buf: Optional[Buffer] = None, offset: int = 0) -> Buffer:
        """
        从单个页中读取数据。

        :param f: 要读取的文件。调用结束后文件位置不保证与调用前相同。
        :param page: 逻辑页号，范围 [0, page_count)
        :param length: 从页中读取的字节数，不超过 page_size - offset
        :param buf: 目标缓冲区，至少 length 字节；为 None 时新分配
        :param offset: 页内起始偏移，范围 [0, page_size)
        :return: 填充后的缓冲区
        """
        self._check_page(page)
        _require_int(length=length, offset=offset)
        if not 0 <= offset < self._page_size:
            raise StreamRangeError(f"In-page offset {offset} out of range [0, {self._page_size})")
        if not 0 <= length <= self._page_size - offset:
            raise StreamRangeError(
                f"Cannot read {length} bytes at in-page offset {offset} from a {self._page_size}-byte page"
            )
        if buf is None:
            buf = bytearray(length)
        view = _writable_view(buf, length)
        if length:
            _read_at(f, page_offset(self._pages[page], self._page_size) + offset, view[:length])
        return buf

    def _runs(self, pos: int, length: int, coalesce: bool) -> Iterator[Tuple[int, int, int]]:
        """
        按逻辑页顺序生成 (起始逻辑页, 页内偏移, 字节数)。
        coalesce 为 True 时，物理页号连续递增的相邻逻辑页合并为一段。
        """
        page, in_page = divmod(pos, self._page_size)
        remaining = length
        while remaining > 0:
            start_page, start_offset = page, in_page
            size = min(self._page_size - in_page, remaining)
            remaining -= size
            page += 1
            while coalesce and remaining > 0 and self._pages[page] == self._pages[page - 1] + 1:
                step = min(self._page_size, remaining)
                size += step
                remaining -= step
                page += 1
            in_page = 0
            yield start_page, start_offset, size

    def read(self, f: BinaryIO, length: int, buf: Optional[Buffer] = None,
             pos: int = 0, coalesce: bool = True) -> Buffer:
        """
        读取流的一段数据，自动跨越多个页。

        :param f: 要读取的文件
        :param length: 读取的字节数
        :param buf: 目标缓冲区，至少 length 字节；为 None 时新分配
        :param pos: 流内的起始逻辑偏移，pos + length 不得超过流长度
        :param coalesce: 合并物理上相邻的页为一次读取，结果与逐页读取一致
        :return: 填充后的缓冲区，内容为流的逻辑字节 [pos, pos + length)
        """
        self._check_range(pos, length)
        if buf is None:
            buf = bytearray(length)
        view = _writable_view(buf, length)
        cursor = 0
        for page, in_page, size in self._runs(pos, length, coalesce):
            chunk = view[cursor:cursor + size]
            if in_page + size <= self._page_size:
                self.read_from_page(f, page, size, chunk, in_page)
            else:
                _read_at(f, page_offset(self._pages[page], self._page_size) + in_page, chunk)
            cursor += size
        return buf

    def read_all(self, f: BinaryIO, buf: Optional[Buffer] = None,
                 pos: int = 0, coalesce: bool = True) -> Buffer:
        """
        读取从 pos 到流末尾的全部数据。buf 必须能容纳 length - pos 字节。
        """
        _require_int(pos=pos)
        if not 0 <= pos <= self._length:
            raise StreamRangeError(f"Position {pos} out of range [0, {self._length}]")
        return self.read(f, self._length - pos, buf, pos, coalesce)

    def open(self, f: BinaryIO) -> 'MsfStreamFile':
        """返回一个基于文件 f 的只读类文件视图。"""
        from .stream_file import MsfStreamFile
        return MsfStreamFile(self, f)
