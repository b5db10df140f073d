"""
控制台表格输出（只负责格式化）
"""

from datetime import datetime
from typing import Iterable, Optional

from tabulate import tabulate

from core.utils.time_utils import format_age, utc_now

from .repositories import StaleClusterRecord
from .summary import Summary


def render_summary_table(summary: Summary) -> str:
    """
    渲染清理汇总表

    Args:
        summary: 清理汇总

    Returns:
        表格文本，最后一行为总删除数量
    """
    rows = [
        ["Proper cluster entries", summary.proper_cluster_entries],
        ["Improper cluster entries", summary.improper_cluster_entries],
    ]
    for table_name, deletions in summary.deletions_for_table.items():
        rows.append([f"Deletions from table '{table_name}'", deletions])
    rows.append(["Total deletions", summary.total_deletions])

    return tabulate(rows, headers=["Summary", "Count"], tablefmt="grid")


def render_stale_clusters_table(
    records: Iterable[StaleClusterRecord], now: Optional[datetime] = None
) -> str:
    """
    渲染过期集群列表

    Args:
        records: 过期集群
        now: 计算报告年龄的参考时间

    Returns:
        表格文本
    """
    if now is None:
        now = utc_now()

    rows = [
        [record.cluster, record.reported_at.strftime("%Y-%m-%d %H:%M:%S"),
         format_age(record.reported_at, now)]
        for record in records
    ]
    return tabulate(rows, headers=["Cluster", "Reported at", "Age"], tablefmt="grid")
