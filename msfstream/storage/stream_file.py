"""
MsfStream 的只读类文件视图。

让上层解析器可以用 read/seek/tell 以及 struct、io.BufferedReader 等标准方式读取一个分页流。
视图只维护逻辑游标，不持有也不关闭底层容器文件。
"""

import io
from typing import BinaryIO, TYPE_CHECKING

if TYPE_CHECKING:
    from .msf_stream import MsfStream


class MsfStreamFile(io.RawIOBase):
    """无缓冲、可定位的只读流视图。"""

    def __init__(self, stream: 'MsfStream', f: BinaryIO) -> None:
        super().__init__()
        self._stream = stream
        self._file = f
        self._pos = 0

    @property
    def stream(self) -> 'MsfStream':
        return self._stream

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def writable(self) -> bool:
        return False

    def _check_open(self) -> None:
        if self.closed:
            raise ValueError("I/O operation on closed stream view.")

    def readinto(self, b) -> int:
        """
        读取至多 len(b) 字节到 b。到达流末尾时返回 0。
        """
        self._check_open()
        view = memoryview(b).cast('B')
        n = min(len(view), max(0, self._stream.length - self._pos))
        if n == 0:
            return 0
        self._stream.read(self._file, n, view[:n], self._pos)
        self._pos += n
        return n

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        self._check_open()
        if whence == io.SEEK_SET:
            pos = offset
        elif whence == io.SEEK_CUR:
            pos = self._pos + offset
        elif whence == io.SEEK_END:
            pos = self._stream.length + offset
        else:
            raise ValueError(f"Invalid whence ({whence})")
        if pos < 0:
            raise ValueError(f"Negative seek position {pos}")
        self._pos = pos
        return self._pos

    def tell(self) -> int:
        self._check_open()
        return self._pos

    def __repr__(self) -> str:
        return f"<MsfStreamFile pos={self._pos} length={self._stream.length}>"
