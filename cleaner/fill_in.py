"""
向数据库写入测试数据

用于验证过期集群查询和清理功能，集群ID固定，报告时间相对于 now 设置
"""

from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlmodel import SQLModel

from core.exceptions import StorageException
from core.models import (
    ClusterRuleToggle,
    ClusterRuleUserFeedback,
    ClusterUserRuleDisableFeedback,
    Recommendation,
    Report,
    ReportInfo,
    RuleHit,
)
from core.utils.time_utils import utc_now

from .tables import CLEANUP_TABLES

TEST_ORG_ID = 1
TEST_USER_ID = "1"

# (集群ID, 各报告距 now 的天数)
TEST_CLUSTERS: List[Tuple[str, List[int]]] = [
    ("00000000-0000-0000-0000-000000000000", [0]),
    ("11111111-1111-1111-1111-111111111111", [45]),
    ("22222222-2222-2222-2222-222222222222", [100]),
    ("33333333-3333-3333-3333-333333333333", [400]),
    ("44444444-4444-4444-4444-444444444444", [40, 2]),
]

TEST_RULES: List[Tuple[str, str]] = [
    ("ccx_rules_ocp.external.rules.nodes_kubelet_version_check.report", "NODE_KUBELET_VERSION"),
    ("ccx_rules_ocp.external.rules.samples_op_failed_image_import_check.report", "SAMPLES_FAILED_IMAGE_IMPORT_ERR"),
]


def _rows_for_cluster(cluster: str, ages: List[int], now: datetime) -> List[SQLModel]:
    """构造一个集群在所有表中的测试数据"""
    rows: List[SQLModel] = []

    for days in ages:
        reported_at = now - timedelta(days=days)
        rows.append(
            Report(
                org_id=TEST_ORG_ID,
                cluster=cluster,
                report='{"reports": []}',
                reported_at=reported_at,
                last_checked_at=reported_at,
            )
        )

    newest = now - timedelta(days=min(ages))
    rows.append(ReportInfo(org_id=TEST_ORG_ID, cluster_id=cluster, version_info="4.9"))

    for rule_fqdn, error_key in TEST_RULES:
        rule_id = f"{rule_fqdn}|{error_key}"
        rows.append(
            RuleHit(
                org_id=TEST_ORG_ID,
                cluster_id=cluster,
                rule_fqdn=rule_fqdn,
                error_key=error_key,
            )
        )
        rows.append(
            Recommendation(
                org_id=TEST_ORG_ID,
                cluster_id=cluster,
                rule_fqdn=rule_fqdn,
                error_key=error_key,
                rule_id=rule_id,
                created_at=newest,
            )
        )

    rule_fqdn, error_key = TEST_RULES[0]
    rows.append(
        ClusterRuleToggle(
            cluster_id=cluster,
            rule_id=rule_fqdn,
            error_key=error_key,
            user_id=TEST_USER_ID,
            disabled=True,
            disabled_at=newest,
            updated_at=newest,
        )
    )
    rows.append(
        ClusterRuleUserFeedback(
            cluster_id=cluster,
            rule_id=rule_fqdn,
            error_key=error_key,
            user_id=TEST_USER_ID,
            message="test feedback",
            user_vote=1,
            added_at=newest,
            updated_at=newest,
        )
    )
    rows.append(
        ClusterUserRuleDisableFeedback(
            cluster_id=cluster,
            user_id=TEST_USER_ID,
            rule_id=rule_fqdn,
            error_key=error_key,
            message="rule disabled for testing",
            added_at=newest,
            updated_at=newest,
        )
    )
    return rows


def fill_in_database(
    session: Session, now: Optional[datetime] = None, log=logger
) -> Dict[str, int]:
    """
    写入测试数据

    Args:
        session: 数据库会话
        now: 参考时间（默认当前 UTC 时间）
        log: 日志记录器

    Returns:
        表名 -> 写入数量（按清理表顺序）

    Raises:
        StorageException: 写入失败
    """
    if now is None:
        now = utc_now()

    inserted: Dict[str, int] = {t.table_name: 0 for t in CLEANUP_TABLES}

    try:
        for cluster, ages in TEST_CLUSTERS:
            rows = _rows_for_cluster(cluster, ages, now)
            session.add_all(rows)
            for row in rows:
                inserted[row.__tablename__] += 1
            log.debug(f"Test data prepared for cluster {cluster}")
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        raise StorageException("fill-in database by test data", str(e)) from e

    log.info(f"Inserted {sum(inserted.values())} rows of test data")
    return inserted
