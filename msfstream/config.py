# msfstream/config.py
# 全局常量配置

# --- 页面 ---
DEFAULT_PAGE_SIZE = 4096
# MSF 7.0 容器允许的页大小
MSF_PAGE_SIZES = (512, 1024, 2048, 4096)

# 物理页号以无符号 32 位整数存储
UINT32_MAX = 0xFFFFFFFF
PAGE_INDEX_FORMAT = '<I'

# --- 日志 ---
DEFAULT_LOG_LEVEL = "WARNING"
VERBOSE_LOG_LEVEL = "DEBUG"

# --- CLI 显示 ---
HEXDUMP_WIDTH = 16
