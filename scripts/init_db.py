#!/usr/bin/env python3
"""
数据库初始化脚本
创建所有表，并可选地写入测试数据
"""

import argparse
import sys
from pathlib import Path

# 添加项目根目录到PATH
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger
from core.config import load_settings
from core.database import DatabaseManager
from core.utils.logger import setup_logger
from cleaner.fill_in import fill_in_database


def main():
    """主初始化流程"""
    parser = argparse.ArgumentParser(description="数据库初始化工具")
    parser.add_argument(
        "--with-test-data",
        action="store_true",
        help="创建表后写入测试数据",
    )
    args = parser.parse_args()

    settings = load_settings()
    # 配置日志
    setup_logger(settings.LOG_LEVEL, settings.LOG_FILE, debug=settings.DEBUG)

    logger.info("=== 数据库初始化 ===")
    logger.info(f"驱动: {settings.DB_DRIVER}")
    if settings.DB_DRIVER == "postgres":
        logger.info(f"数据库: {settings.POSTGRES_DB}")
        logger.info(f"主机: {settings.POSTGRES_HOST}:{settings.POSTGRES_PORT}")
    else:
        logger.info(f"数据库文件: {settings.SQLITE_DATASOURCE}")

    db = DatabaseManager(settings)
    try:
        db.init()
        db.create_tables()

        if args.with_test_data:
            with db.get_session() as session:
                inserted = fill_in_database(session)
            for table_name, count in inserted.items():
                logger.info(f"  {table_name}: {count}")

        logger.info("=== 数据库初始化成功完成 ===")

    except Exception as e:
        logger.error(f"数据库初始化失败: {e}")
        sys.exit(1)

    finally:
        db.close()


if __name__ == "__main__":
    main()
