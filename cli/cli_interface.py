# -*- coding: utf-8 -*-
"""
CLI接口模块
封装流信息、页映射与十六进制转储的显示逻辑
"""

from typing import BinaryIO, Optional

from loguru import logger
from rich.console import Console
from rich.table import Table

from msfstream.config import HEXDUMP_WIDTH, MSF_PAGE_SIZES
from msfstream.storage import MsfStream


def format_ascii(chunk: bytes) -> str:
    """不可打印字符显示为 '.'"""
    return ''.join(chr(b) if 0x20 <= b < 0x7f else '.' for b in chunk)


class CLIInterface:
    """命令行显示类"""

    def __init__(self, stream: MsfStream, console: Optional[Console] = None):
        self.stream = stream
        self.console = console or Console()
        if stream.page_size not in MSF_PAGE_SIZES:
            logger.warning(f"页大小 {stream.page_size} 不是 MSF 标准页大小 {MSF_PAGE_SIZES}")

    def print_summary(self) -> None:
        """打印流的基本信息"""
        table = Table(show_header=True, header_style="bold cyan", title="Stream")
        table.add_column("page_size")
        table.add_column("length")
        table.add_column("page_count")
        table.add_row(str(self.stream.page_size), str(self.stream.length), str(self.stream.page_count))
        self.console.print(table)

    def print_page_map(self) -> None:
        """打印逻辑页到物理页的映射"""
        table = Table(show_header=True, header_style="bold cyan", title="Page map")
        table.add_column("logical", justify="right")
        table.add_column("physical", justify="right")
        table.add_column("file offset", justify="right")
        table.add_column("stream bytes")
        page_size = self.stream.page_size
        for i, physical in enumerate(self.stream.pages):
            start = i * page_size
            end = min(start + page_size, self.stream.length)
            table.add_row(str(i), str(physical), f"0x{self.stream.physical_offset(i):08x}", f"[{start}, {end})")
        self.console.print(table)
        self.console.print(f"[bold green]({self.stream.page_count} pages)[/bold green]")

    def print_hexdump(self, f: BinaryIO, pos: int = 0, count: Optional[int] = None) -> None:
        """读取流的 [pos, pos+count) 并以十六进制转储显示"""
        if count is None:
            data = bytes(self.stream.read_all(f, pos=pos))
        else:
            data = bytes(self.stream.read(f, count, pos=pos))
        if not data:
            self.console.print("[bold yellow]读取结果: 无数据[/bold yellow]")
            return
        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("offset", justify="right")
        table.add_column("hex")
        table.add_column("ascii")
        for row in range(0, len(data), HEXDUMP_WIDTH):
            chunk = data[row:row + HEXDUMP_WIDTH]
            table.add_row(f"{pos + row:08x}", chunk.hex(' '), format_ascii(chunk))
        self.console.print(table)
        self.console.print(f"[bold green]({len(data)} bytes)[/bold green]")

    def dump_to_file(self, f: BinaryIO, out_path: str, pos: int = 0, count: Optional[int] = None) -> int:
        """将流的 [pos, pos+count) 原样写入 out_path，返回写入的字节数"""
        if count is None:
            data = self.stream.read_all(f, pos=pos)
        else:
            data = self.stream.read(f, count, pos=pos)
        with open(out_path, 'wb') as out:
            out.write(data)
        logger.info(f"已写出 {len(data)} 字节到 {out_path}")
        return len(data)
