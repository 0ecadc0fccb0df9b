"""
msfstream：MSF 容器文件中分页流的只读访问库。

模块清单：
- config: 全局常量（页大小、日志级别等）
- storage: 页面算术、分页流、类文件视图与异常体系
"""

from msfstream.storage import (
    MsfStream,
    MsfStreamFile,
    page_count,
)

__version__ = "0.1.0"

__all__ = ["MsfStream", "MsfStreamFile", "page_count", "__version__"]
