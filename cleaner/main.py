"""
Aggregator Cleaner - 命令行入口

三种模式（每次只执行一种）：
1. --cleanup: 删除集群列表文件中的集群在所有表中的数据
2. --fill-in-db: 写入测试数据
3. 默认: 显示最新报告早于 MAX_AGE 的集群（只显示，不删除）
"""

import argparse
import sys
from typing import List, Optional

from loguru import logger
from pydantic import ValidationError

from core.config import Settings, load_settings
from core.database import DatabaseManager
from core.exceptions import CleanerException
from core.utils.logger import setup_logger
from core.utils.time_utils import utc_now

from . import __version__
from .cluster_list import read_cluster_list, write_cluster_list
from .fill_in import fill_in_database
from .renderer import render_stale_clusters_table, render_summary_table
from .repositories import CleanupRepository
from .summary import Summary, build_summary


def build_parser() -> argparse.ArgumentParser:
    """构建命令行参数解析器"""
    parser = argparse.ArgumentParser(
        prog="aggregator-cleaner",
        description="清理 Insights Results Aggregator 数据库中过期集群的数据",
    )
    parser.add_argument(
        "--cleanup",
        action="store_true",
        help="perform database cleanup",
    )
    parser.add_argument(
        "--summary",
        action="store_true",
        help="print summary table after cleanup",
    )
    parser.add_argument(
        "--fill-in-db",
        action="store_true",
        help="fill-in database by test data",
    )
    parser.add_argument(
        "--transactional",
        action="store_true",
        help="delete from all tables in one transaction",
    )
    parser.add_argument(
        "--output",
        metavar="FILE",
        help="store list of stale clusters into the specified file",
    )
    parser.add_argument(
        "--show-configuration",
        action="store_true",
        help="show configuration and exit",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def perform_cleanup(
    db: DatabaseManager,
    cluster_list_file: str,
    transactional: bool = False,
    log=logger,
) -> Summary:
    """
    读取集群列表并删除这些集群的数据

    列表读取失败时不会执行任何删除

    Returns:
        清理汇总
    """
    try:
        clusters, improper_count = read_cluster_list(cluster_list_file, log=log)
    except (OSError, CleanerException) as e:
        log.error(f"Read cluster list: {e}")
        raise

    repo = CleanupRepository()
    try:
        with db.get_session() as session:
            deletions = repo.delete_for_clusters(
                session, clusters, transactional=transactional, log=log
            )
    except CleanerException as e:
        log.error(f"Performing cleanup: {e}")
        raise

    return build_summary(clusters, improper_count, deletions)


def display_stale_clusters(
    db: DatabaseManager,
    settings: Settings,
    output: Optional[str] = None,
    log=logger,
) -> int:
    """
    显示最新报告早于 MAX_AGE 的集群，可选地写入文件

    Returns:
        过期集群数量
    """
    now = utc_now()
    max_age = settings.get_max_age()
    repo = CleanupRepository()

    try:
        with db.get_session() as session:
            records = repo.find_stale_clusters(session, max_age, now=now)
    except CleanerException as e:
        log.error(f"Selecting records from database: {e}")
        raise

    for record in records:
        log.info(f"Stale cluster {record.cluster}, last report at {record.reported_at}")
    log.info(f"Found {len(records)} clusters older than {settings.MAX_AGE}")

    print(render_stale_clusters_table(records, now))

    if output:
        try:
            written = write_cluster_list(output, (r.cluster for r in records))
        except OSError as e:
            log.error(f"Storing cluster list: {e}")
            raise
        log.info(f"Stored {written} cluster IDs into {output}")

    return len(records)


def do_selected_operation(
    settings: Settings,
    db: DatabaseManager,
    args: argparse.Namespace,
    log=logger,
) -> None:
    """
    执行命令行选择的操作

    优先级：cleanup > fill-in-db > 显示过期集群

    Raises:
        OSError, CleanerException: 操作失败（已记录日志）
    """
    if args.cleanup:
        summary = perform_cleanup(
            db, settings.CLUSTER_LIST_FILE, transactional=args.transactional, log=log
        )
        if args.summary:
            print(render_summary_table(summary))
    elif args.fill_in_db:
        try:
            with db.get_session() as session:
                fill_in_database(session, log=log)
        except CleanerException as e:
            log.error(f"Fill-in database by test data: {e}")
            raise
    else:
        display_stale_clusters(db, settings, output=args.output, log=log)


def main(argv: Optional[List[str]] = None) -> int:
    """清理主流程入口"""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
    except ValidationError as e:
        logger.error(f"Load configuration: {e}")
        return 1

    log = setup_logger(settings.LOG_LEVEL, settings.LOG_FILE, debug=settings.DEBUG)

    if args.show_configuration:
        for key, value in settings.masked().items():
            log.info(f"{key} = {value}")
        return 0

    log.debug("Started")

    db = DatabaseManager(settings)
    exit_code = 0
    try:
        db.init()
    except CleanerException as e:
        log.error(f"Connection to database not established: {e}")
        exit_code = 1
    else:
        try:
            do_selected_operation(settings, db, args, log=log)
        except (OSError, CleanerException) as e:
            log.error(f"Operation failed: {e}")
            exit_code = 1
        finally:
            db.close()

    log.debug("Finished")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
