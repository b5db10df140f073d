"""
使用 Pydantic Settings 进行配置管理
从 properties 文件和环境变量加载配置，文件路径由环境变量指定
"""

import os
from datetime import timedelta
from typing import Optional
from urllib.parse import parse_qsl

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from loguru import logger
from sqlalchemy.engine import URL

from .utils.time_utils import parse_max_age

# 指定配置文件路径的环境变量
CONFIG_FILE_ENV_VARIABLE = "CLEANER_CONFIG_FILE"
DEFAULT_CONFIG_FILE = "cleaner.properties"

SUPPORTED_DB_DRIVERS = ("postgres", "sqlite")


class Settings(BaseSettings):
    """清理工具配置，包含参数校验"""

    # 数据库配置
    DB_DRIVER: str = Field(default="postgres", description="数据库驱动（postgres 或 sqlite）")
    POSTGRES_HOST: str = Field(default="localhost", description="PostgreSQL 主机")
    POSTGRES_PORT: int = Field(default=5432, description="PostgreSQL 端口")
    POSTGRES_DB: str = Field(default="aggregator", description="PostgreSQL 数据库名称")
    POSTGRES_USER: str = Field(default="postgres", description="PostgreSQL 用户名")
    POSTGRES_PASSWORD: str = Field(default="", description="PostgreSQL 密码")
    POSTGRES_PARAMS: str = Field(
        default="", description="附加连接参数，例如 sslmode=disable"
    )
    SQLITE_DATASOURCE: str = Field(
        default="aggregator.db", description="SQLite 数据库文件"
    )

    # 日志配置
    LOG_LEVEL: str = Field(default="INFO", description="日志级别")
    LOG_FILE: Optional[str] = Field(default=None, description="日志文件路径")
    DEBUG: bool = Field(default=False, description="调试模式（可读的控制台输出）")

    # 清理配置
    MAX_AGE: str = Field(default="90 days", description="报告的最大保留时间")
    CLUSTER_LIST_FILE: str = Field(
        default="cluster_list.txt", description="待清理集群列表文件"
    )

    model_config = SettingsConfigDict(
        env_file=DEFAULT_CONFIG_FILE,
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("DB_DRIVER")
    @classmethod
    def validate_db_driver(cls, v: str) -> str:
        v_lower = v.lower()
        if v_lower not in SUPPORTED_DB_DRIVERS:
            raise ValueError(f"DB_DRIVER 必须为 {list(SUPPORTED_DB_DRIVERS)} 中的一项")
        return v_lower

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL 必须为 {valid_levels} 中的一项")
        return v_upper

    @field_validator("MAX_AGE")
    @classmethod
    def validate_max_age(cls, v: str) -> str:
        # parse_max_age 抛出的 ValueError 会被转换为 ValidationError
        parse_max_age(v)
        return v.strip()

    def get_database_url(self) -> str:
        """
        获取数据库连接 URL

        返回:
            数据库连接 URL 字符串
        """
        if self.DB_DRIVER == "sqlite":
            return f"sqlite:///{self.SQLITE_DATASOURCE}"

        # URL.create 负责转义用户名和密码中的 @ : / 等字符
        url = URL.create(
            "postgresql+psycopg2",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_HOST,
            port=self.POSTGRES_PORT,
            database=self.POSTGRES_DB,
            query=dict(parse_qsl(self.POSTGRES_PARAMS)),
        )
        return url.render_as_string(hide_password=False)

    def get_max_age(self) -> timedelta:
        """获取过期阈值"""
        return parse_max_age(self.MAX_AGE)

    def masked(self) -> dict:
        """
        获取用于展示的配置（隐藏密码）

        返回:
            配置字典
        """
        values = self.model_dump()
        if values.get("POSTGRES_PASSWORD"):
            values["POSTGRES_PASSWORD"] = "****"
        return values


# ========== 配置获取函数 ==========


def load_settings(config_file: Optional[str] = None) -> Settings:
    """
    加载配置

    配置文件路径优先取参数，其次取环境变量 CLEANER_CONFIG_FILE，
    最后使用默认的 cleaner.properties。文件不存在时只使用环境变量和默认值。

    参数:
        config_file: 配置文件路径

    返回:
        配置实例
    """
    if config_file is None:
        config_file = os.environ.get(CONFIG_FILE_ENV_VARIABLE, DEFAULT_CONFIG_FILE)

    settings = Settings(_env_file=config_file)
    logger.debug(f"Settings loaded from {config_file}")
    return settings
