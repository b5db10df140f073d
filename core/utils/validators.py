"""
验证工具
"""
import re

# 规范的 UUID 文本形式：8-4-4-4-12 个十六进制字符，不区分大小写
UUID_PATTERN = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}",
    re.IGNORECASE,
)


def is_valid_uuid(value: str) -> bool:
    """
    检查字符串是否为合法的 UUID

    只接受带连字符的规范形式，不接受花括号、urn:uuid: 前缀、
    无连字符形式以及首尾空白。

    Args:
        value: 要验证的字符串

    Returns:
        合法则返回True，否则返回False（从不抛出异常）
    """
    if not isinstance(value, str):
        return False
    return UUID_PATTERN.fullmatch(value) is not None
