# main.py

import argparse
import sys
from typing import List, Optional, Sequence

from loguru import logger
from rich.console import Console

from cli.cli_interface import CLIInterface
from msfstream.config import DEFAULT_LOG_LEVEL, DEFAULT_PAGE_SIZE, VERBOSE_LOG_LEVEL
from msfstream.storage import MsfStream, MsfStreamError

console = Console()


def parse_page_list(text: str) -> List[int]:
    """
    解析页号列表，如 "5,2,9" 或 "5,2,9-12"（区间两端都包含）。
    """
    pages: List[int] = []
    for part in text.split(','):
        part = part.strip()
        if not part:
            continue
        if '-' in part:
            first, last = part.split('-', 1)
            start, end = int(first), int(last)
            if end < start:
                raise ValueError(f"Invalid page range '{part}'")
            pages.extend(range(start, end + 1))
        else:
            pages.append(int(part))
    return pages


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="msfstream",
        description="查看 MSF 容器文件中的一个分页流",
    )
    parser.add_argument("container", help="容器文件路径")
    parser.add_argument("--pages", required=True, help="物理页号列表，如 5,2,9 或 5,2,9-12")
    parser.add_argument("--length", type=int, required=True, help="流的字节长度")
    parser.add_argument("--page-size", type=int, default=DEFAULT_PAGE_SIZE, help="页大小（字节）")
    parser.add_argument("--pos", type=int, default=0, help="起始逻辑偏移")
    parser.add_argument("--count", type=int, default=None, help="读取字节数，默认读到流末尾")
    parser.add_argument("--out", default=None, help="将原始字节写入该文件，而不是显示十六进制转储")
    parser.add_argument("--verbose", "-v", action="store_true", help="输出调试日志")
    return parser


def configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(lambda msg: print(msg, end='', file=sys.stderr),
               level=VERBOSE_LOG_LEVEL if verbose else DEFAULT_LOG_LEVEL)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """命令行入口，返回退出码。"""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        pages = parse_page_list(args.pages)
        stream = MsfStream(args.page_size, args.length, pages)
    except (MsfStreamError, ValueError) as e:
        console.print(f"[bold red]错误: {e}[/bold red]")
        return 1

    cli = CLIInterface(stream, console=console)
    try:
        with open(args.container, 'rb') as f:
            if args.out:
                cli.dump_to_file(f, args.out, pos=args.pos, count=args.count)
            else:
                cli.print_summary()
                cli.print_page_map()
                cli.print_hexdump(f, pos=args.pos, count=args.count)
    except MsfStreamError as e:
        console.print(f"[bold red]读取失败: {e}[/bold red]")
        return 1
    except OSError as e:
        console.print(f"[bold red]无法访问文件: {e}[/bold red]")
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
