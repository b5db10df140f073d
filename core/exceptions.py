"""
清理工具的自定义异常
"""
from typing import Dict, List, Optional


class CleanerException(Exception):
    """Aggregator Cleaner 基础异常类"""
    pass


# ========== 数据库异常 ==========

class DatabaseException(CleanerException):
    """数据库相关异常基类"""
    pass


class DatabaseNotInitializedException(DatabaseException):
    """数据库未初始化异常"""
    def __init__(self, manager_name: str = "DatabaseManager"):
        super().__init__(
            f"{manager_name} not initialized. Call init() first."
        )


class DatabaseConnectionException(DatabaseException):
    """数据库连接异常"""
    def __init__(self, detail: str):
        super().__init__(f"Database connection error: {detail}")


class StorageException(DatabaseException):
    """存储操作（查询/删除/插入）失败"""
    def __init__(self, operation: str, detail: str):
        self.operation = operation
        super().__init__(f"Storage operation '{operation}' failed: {detail}")


class CleanupException(StorageException):
    """
    删除某张表时失败

    deletions 中保存失败前已处理的表及其删除数量
    """
    def __init__(
        self,
        table_name: str,
        detail: str,
        deletions: Optional[Dict[str, int]] = None,
    ):
        self.table_name = table_name
        self.deletions = dict(deletions or {})
        super().__init__(f"delete from table '{table_name}'", detail)


# ========== 输入异常 ==========

class ClusterListReadException(CleanerException):
    """集群列表文件读取中途失败，保留已读取的部分结果"""
    def __init__(
        self,
        path: str,
        detail: str,
        clusters: Optional[List[str]] = None,
        improper_count: int = 0,
    ):
        self.path = path
        self.clusters = list(clusters or [])
        self.improper_count = improper_count
        super().__init__(f"Failed to read cluster list {path}: {detail}")
