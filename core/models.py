"""
SQLModel 数据库模型
Insights Results Aggregator 存储中与集群相关的表

时间列统一为不带时区的 DateTime，保存 UTC 时间
"""
from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel, Column, Index
from sqlalchemy import DateTime, Text

from .utils.time_utils import utc_now


class Report(SQLModel, table=True):
    """报告表 - 每个集群收到的分析报告，reported_at 用于判断集群是否过期"""

    __tablename__ = "report"

    id: Optional[int] = Field(default=None, primary_key=True, description="主键ID")
    org_id: int = Field(description="组织ID")
    cluster: str = Field(max_length=36, description="集群ID（UUID）")
    report: str = Field(
        default="{}",
        sa_column=Column(Text, nullable=False),
        description="报告内容（JSON）"
    )
    reported_at: datetime = Field(
        sa_type=DateTime,
        default_factory=utc_now,
        description="报告生成时间"
    )
    last_checked_at: datetime = Field(
        sa_type=DateTime,
        default_factory=utc_now,
        description="最后一次检查时间"
    )
    kafka_offset: int = Field(default=0, description="Kafka 消息偏移量")

    __table_args__ = (
        Index("idx_report_cluster", "cluster"),
        Index("idx_report_reported_at", "reported_at"),
    )


class ReportInfo(SQLModel, table=True):
    """报告附加信息表"""

    __tablename__ = "report_info"

    id: Optional[int] = Field(default=None, primary_key=True, description="主键ID")
    org_id: int = Field(description="组织ID")
    cluster_id: str = Field(max_length=36, index=True, description="集群ID")
    version_info: str = Field(default="", max_length=32, description="集群版本")


class RuleHit(SQLModel, table=True):
    """规则命中表 - 报告中命中的规则"""

    __tablename__ = "rule_hit"

    id: Optional[int] = Field(default=None, primary_key=True, description="主键ID")
    org_id: int = Field(description="组织ID")
    cluster_id: str = Field(max_length=36, index=True, description="集群ID")
    rule_fqdn: str = Field(max_length=255, description="规则全名")
    error_key: str = Field(max_length=255, description="错误键")
    template_data: str = Field(
        default="{}",
        sa_column=Column(Text, nullable=False),
        description="模板数据（JSON）"
    )


class Recommendation(SQLModel, table=True):
    """推荐表 - 按集群汇总的规则推荐"""

    __tablename__ = "recommendation"

    id: Optional[int] = Field(default=None, primary_key=True, description="主键ID")
    org_id: int = Field(description="组织ID")
    cluster_id: str = Field(max_length=36, index=True, description="集群ID")
    rule_fqdn: str = Field(max_length=255, description="规则全名")
    error_key: str = Field(max_length=255, description="错误键")
    rule_id: str = Field(max_length=255, description="规则ID（rule_fqdn|error_key）")
    created_at: datetime = Field(
        sa_type=DateTime, default_factory=utc_now, description="创建时间"
    )


class ClusterRuleToggle(SQLModel, table=True):
    """规则开关表 - 用户在集群上禁用/启用的规则"""

    __tablename__ = "cluster_rule_toggle"

    id: Optional[int] = Field(default=None, primary_key=True, description="主键ID")
    cluster_id: str = Field(max_length=36, index=True, description="集群ID")
    rule_id: str = Field(max_length=255, description="规则ID")
    error_key: str = Field(max_length=255, description="错误键")
    user_id: str = Field(max_length=255, description="用户ID")
    disabled: bool = Field(default=True, description="是否禁用")
    disabled_at: Optional[datetime] = Field(
        sa_type=DateTime, default=None, description="禁用时间"
    )
    enabled_at: Optional[datetime] = Field(
        sa_type=DateTime, default=None, description="启用时间"
    )
    updated_at: datetime = Field(
        sa_type=DateTime, default_factory=utc_now, description="更新时间"
    )


class ClusterRuleUserFeedback(SQLModel, table=True):
    """用户反馈表 - 用户对集群规则结果的投票和留言"""

    __tablename__ = "cluster_rule_user_feedback"

    id: Optional[int] = Field(default=None, primary_key=True, description="主键ID")
    cluster_id: str = Field(max_length=36, index=True, description="集群ID")
    rule_id: str = Field(max_length=255, description="规则ID")
    error_key: str = Field(max_length=255, description="错误键")
    user_id: str = Field(max_length=255, description="用户ID")
    message: str = Field(default="", sa_column=Column(Text, nullable=False), description="留言")
    user_vote: int = Field(default=0, description="投票（-1, 0, 1）")
    added_at: datetime = Field(
        sa_type=DateTime, default_factory=utc_now, description="添加时间"
    )
    updated_at: datetime = Field(
        sa_type=DateTime, default_factory=utc_now, description="更新时间"
    )


class ClusterUserRuleDisableFeedback(SQLModel, table=True):
    """禁用反馈表 - 用户禁用规则时填写的原因"""

    __tablename__ = "cluster_user_rule_disable_feedback"

    id: Optional[int] = Field(default=None, primary_key=True, description="主键ID")
    cluster_id: str = Field(max_length=36, index=True, description="集群ID")
    user_id: str = Field(max_length=255, description="用户ID")
    rule_id: str = Field(max_length=255, description="规则ID")
    error_key: str = Field(max_length=255, description="错误键")
    message: str = Field(default="", sa_column=Column(Text, nullable=False), description="原因")
    added_at: datetime = Field(
        sa_type=DateTime, default_factory=utc_now, description="添加时间"
    )
    updated_at: datetime = Field(
        sa_type=DateTime, default_factory=utc_now, description="更新时间"
    )
