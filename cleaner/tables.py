"""
清理时涉及的表及其集群ID列

顺序即删除顺序：子表在前，report 表最后
"""

from typing import NamedTuple, Tuple


class TableAndKey(NamedTuple):
    """表名和用作删除条件的集群ID列名"""

    table_name: str
    key_name: str


CLEANUP_TABLES: Tuple[TableAndKey, ...] = (
    TableAndKey("cluster_rule_toggle", "cluster_id"),
    TableAndKey("cluster_rule_user_feedback", "cluster_id"),
    TableAndKey("cluster_user_rule_disable_feedback", "cluster_id"),
    TableAndKey("rule_hit", "cluster_id"),
    TableAndKey("recommendation", "cluster_id"),
    TableAndKey("report_info", "cluster_id"),
    TableAndKey("report", "cluster"),
)
