"""
清理操作数据库仓储

集中管理按集群删除数据和查询过期集群的数据库操作
"""

from datetime import datetime, timedelta
from typing import Dict, List, NamedTuple, Optional, Sequence

from loguru import logger
from sqlalchemy import column, delete, func, select, table
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import CleanupException, StorageException
from core.models import Report
from core.utils.time_utils import utc_now

from cleaner.tables import CLEANUP_TABLES, TableAndKey


class StaleClusterRecord(NamedTuple):
    """过期集群及其最新报告时间"""

    cluster: str
    reported_at: datetime


class CleanupRepository:
    """
    清理操作数据库仓储

    职责：
    - 按给定的集群列表删除各表中的数据，并统计每张表的删除数量
    - 查询最新报告早于阈值的集群（只读）
    """

    # ========== 按集群删除 ==========

    @staticmethod
    def delete_for_clusters(
        session: Session,
        cluster_list: Sequence[str],
        tables: Sequence[TableAndKey] = CLEANUP_TABLES,
        transactional: bool = False,
        log=logger,
    ) -> Dict[str, int]:
        """
        删除所有表中属于给定集群的记录

        按 tables 的顺序逐表执行一条 DELETE。默认每张表删除后立即提交，
        中途失败时已删除的表不会回滚；transactional=True 时所有表在同一事务中提交。
        集群ID不会再次校验，调用方需保证列表中只有合法的 UUID。

        Args:
            session: 数据库会话
            cluster_list: 集群ID列表（允许重复）
            tables: 有序的 (表名, 集群ID列) 列表
            transactional: 是否在一个事务中完成所有删除
            log: 日志记录器

        Returns:
            表名 -> 删除数量（按 tables 顺序，删除 0 行的表也包含在内）

        Raises:
            CleanupException: 某张表删除失败，后续表不再处理
        """
        deletions: Dict[str, int] = {t.table_name: 0 for t in tables}

        # 空列表时不执行任何语句，避免 IN () 或无条件删除
        if not cluster_list:
            log.info("Cluster list is empty, nothing to delete")
            return deletions

        clusters = list(cluster_list)
        processed: Dict[str, int] = {}

        for table_name, key_name in tables:
            target = table(table_name, column(key_name))
            statement = delete(target).where(target.c[key_name].in_(clusters))

            try:
                result = session.execute(statement)
                if not transactional:
                    session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                log.error(f"Unable to delete records from table {table_name}: {e}")
                raise CleanupException(table_name, str(e), deletions=processed) from e

            affected = result.rowcount
            deletions[table_name] = affected
            processed[table_name] = affected
            log.info(f"Deleted {affected} rows from table {table_name}")

        if transactional:
            try:
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                raise StorageException("commit cleanup transaction", str(e)) from e

        return deletions

    # ========== 过期集群查询 ==========

    @staticmethod
    def find_stale_clusters(
        session: Session,
        max_age: timedelta,
        now: Optional[datetime] = None,
    ) -> List[StaleClusterRecord]:
        """
        查询最新报告早于 now - max_age 的集群

        每个集群最多出现一次，结果保持数据库返回的顺序。只读，不删除任何数据。

        Args:
            session: 数据库会话
            max_age: 最大保留时间
            now: 参考时间（默认当前 UTC 时间）

        Returns:
            StaleClusterRecord 列表

        Raises:
            StorageException: 查询失败
        """
        if now is None:
            now = utc_now()
        threshold = now - max_age

        newest = func.max(Report.reported_at)
        statement = (
            select(Report.cluster, newest.label("reported_at"))
            .group_by(Report.cluster)
            .having(newest < threshold)
        )

        try:
            rows = session.execute(statement).all()
        except SQLAlchemyError as e:
            raise StorageException("select stale clusters", str(e)) from e

        return [StaleClusterRecord(row.cluster, row.reported_at) for row in rows]
