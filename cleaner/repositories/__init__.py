"""
清理工具数据库操作仓储模块
"""

from .cleanup_repository import CleanupRepository, StaleClusterRecord

__all__ = ["CleanupRepository", "StaleClusterRecord"]
