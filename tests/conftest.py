import os
import tempfile
import pytest

FILLER = 0xCC


def build_container(page_size, contents, total_pages=None):
    """
    构造一个模拟的分页容器：contents 为 {物理页号: 数据}，数据不足一页时补零。
    未使用的页填充 0xCC，读错页时容易发现。
    """
    if total_pages is None:
        total_pages = max(contents) + 1 if contents else 0
    out = bytearray()
    for i in range(total_pages):
        data = contents.get(i)
        if data is None:
            out += bytes([FILLER]) * page_size
        else:
            assert len(data) <= page_size
            out += data + b'\x00' * (page_size - len(data))
    return bytes(out)


def scatter(data, page_size, pages):
    """把 data 按页切开，依次放到 pages 指定的物理页上"""
    contents = {}
    for i, physical in enumerate(pages):
        contents[physical] = data[i * page_size:(i + 1) * page_size]
    return contents


@pytest.fixture
def container_file():
    """返回一个写入容器字节并打开文件的工厂，测试结束后关闭并删除"""
    opened = []

    def _make(page_size, contents, total_pages=None):
        with tempfile.NamedTemporaryFile(delete=False) as tf:
            tf.write(build_container(page_size, contents, total_pages))
            path = tf.name
        f = open(path, 'rb')
        opened.append((f, path))
        return f

    yield _make
    for f, path in opened:
        f.close()
        os.remove(path)
