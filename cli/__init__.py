"""
msfstream 命令行工具。
"""
