"""
测试公共 fixtures

使用内存 SQLite 数据库，不依赖外部 PostgreSQL
"""

import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Dict, Iterable, List

import pytest
from loguru import logger
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core import models  # noqa: E402

NOW = datetime(2026, 10, 18, 12, 0, 0)

CLUSTER_A = "5d5892d3-1f74-4ccf-91af-548dfc9767aa"
CLUSTER_B = "b0c2d108-f0b4-4b6c-9f5a-8b3a7f3cbe1e"
CLUSTER_C = "0f7f5a2e-3c1d-4f0e-9a2b-6e4d2c1b0a99"


@pytest.fixture(autouse=True)
def reset_logger():
    """setup_logger 会替换全局 sink，每个测试后恢复默认输出"""
    yield
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")


@pytest.fixture
def engine():
    """内存数据库引擎，包含所有表"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    """数据库会话"""
    with Session(engine) as session:
        yield session


@pytest.fixture
def executed_statements(engine) -> List[str]:
    """记录引擎上执行的所有 SQL 语句"""
    statements: List[str] = []

    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", before_cursor_execute)
    yield statements
    event.remove(engine, "before_cursor_execute", before_cursor_execute)


@pytest.fixture
def log_messages() -> List[str]:
    """捕获 loguru 日志消息"""
    messages: List[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


def seed_cluster(
    session: Session,
    cluster: str,
    report_ages_days: Iterable[int],
    now: datetime = NOW,
    rule_hits: int = 2,
) -> Dict[str, int]:
    """
    写入一个集群的报告和关联数据

    Returns:
        表名 -> 写入数量
    """
    ages = list(report_ages_days)
    rows = []
    for days in ages:
        rows.append(
            models.Report(
                org_id=1, cluster=cluster, reported_at=now - timedelta(days=days)
            )
        )
    rows.append(models.ReportInfo(org_id=1, cluster_id=cluster, version_info="4.9"))
    for i in range(rule_hits):
        rows.append(
            models.RuleHit(
                org_id=1, cluster_id=cluster, rule_fqdn=f"rule.{i}", error_key="KEY"
            )
        )
    rows.append(
        models.Recommendation(
            org_id=1,
            cluster_id=cluster,
            rule_fqdn="rule.0",
            error_key="KEY",
            rule_id="rule.0|KEY",
        )
    )
    rows.append(
        models.ClusterRuleToggle(
            cluster_id=cluster, rule_id="rule.0", error_key="KEY", user_id="1"
        )
    )
    rows.append(
        models.ClusterRuleUserFeedback(
            cluster_id=cluster, rule_id="rule.0", error_key="KEY", user_id="1"
        )
    )
    rows.append(
        models.ClusterUserRuleDisableFeedback(
            cluster_id=cluster, rule_id="rule.0", error_key="KEY", user_id="1"
        )
    )
    session.add_all(rows)
    session.commit()

    return {
        "cluster_rule_toggle": 1,
        "cluster_rule_user_feedback": 1,
        "cluster_user_rule_disable_feedback": 1,
        "rule_hit": rule_hits,
        "recommendation": 1,
        "report_info": 1,
        "report": len(ages),
    }
