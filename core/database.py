"""
数据库连接管理
- PostgreSQL 使用 psycopg2 驱动和连接池
- SQLite 用于本地调试
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlmodel import SQLModel
from loguru import logger

from .config import Settings
from .exceptions import DatabaseConnectionException, DatabaseNotInitializedException

# 导入模型以便 SQLModel.metadata 中包含所有表
from . import models  # noqa: F401


class DatabaseManager:
    """
    同步数据库连接管理器

    由顶层进程创建并持有，会话通过 get_session() 传给各个组件
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker[Session]] = None

    def init(self) -> None:
        """
        初始化数据库引擎和会话工厂，并验证连接可用

        Raises:
            DatabaseConnectionException: 无法连接数据库
        """
        if self._engine is not None:
            logger.warning("DatabaseManager 已经初始化过")
            return

        database_url = self._settings.get_database_url()
        engine: Optional[Engine] = None

        # URL 无法解析或缺少 DBAPI 驱动同样视为连接失败
        try:
            if self._settings.DB_DRIVER == "postgres":
                # 创建带连接池的引擎
                engine = create_engine(
                    database_url,
                    echo=False,
                    pool_size=5,
                    max_overflow=0,
                    pool_pre_ping=True,  # 使用前验证连接
                    pool_recycle=3600,  # 1 小时后回收连接
                )
            else:
                engine = create_engine(database_url, echo=False)

            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except (SQLAlchemyError, ImportError) as e:
            if engine is not None:
                engine.dispose()
            raise DatabaseConnectionException(str(e)) from e

        self._engine = engine

        # 创建会话工厂
        self._session_factory = sessionmaker(
            self._engine,
            class_=Session,
            expire_on_commit=False,
            autoflush=False,
        )

        logger.info(f"数据库管理器初始化完成 ({self._settings.DB_DRIVER})")

    def close(self) -> None:
        """关闭数据库引擎并清理连接"""
        if self._engine:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.debug("数据库连接已关闭")

    @contextmanager
    def get_session(self) -> Iterator[Session]:
        """
        获取一个数据库会话（上下文管理器）

        提交由调用方负责，异常时回滚

        用法示例：
            with db.get_session() as session:
                repo.delete_for_clusters(session, clusters)
        """
        if self._session_factory is None:
            raise DatabaseNotInitializedException("DatabaseManager")

        session = self._session_factory()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_tables(self) -> None:
        """创建所有数据库表（用于开发/测试）"""
        if self._engine is None:
            raise DatabaseNotInitializedException("DatabaseManager")

        SQLModel.metadata.create_all(self._engine)
        logger.info("数据库表已创建")

    @property
    def engine(self) -> Engine:
        """获取引擎实例"""
        if self._engine is None:
            raise DatabaseNotInitializedException("DatabaseManager")
        return self._engine

    def is_initialized(self) -> bool:
        """检查是否已初始化"""
        return self._engine is not None
