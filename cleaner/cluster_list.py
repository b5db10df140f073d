"""
集群列表文件的读取和写入

文件格式：每行一个集群ID（UUID），以 LF 结尾，没有表头和注释
"""

from typing import Iterable, List, Tuple

from loguru import logger

from core.exceptions import ClusterListReadException
from core.utils.validators import is_valid_uuid


def read_cluster_list(path: str, log=logger) -> Tuple[List[str], int]:
    """
    读取待清理的集群列表

    每行只去掉结尾的换行符，其他空白字符保留，因此带空格的行视为不合法。
    包含非 UTF-8 字节的行同样视为不合法。
    不合法的行只计数并记录日志，不会返回给调用方。

    Args:
        path: 集群列表文件路径
        log: 日志记录器

    Returns:
        (合法的集群ID列表, 不合法的行数)

    Raises:
        OSError: 文件无法打开
        ClusterListReadException: 读取过程中出错，异常中保存已读取的部分结果
    """
    log.debug("Cluster list read")

    clusters: List[str] = []
    improper_count = 0

    # 只按 "\n" 分行且不做换行符转换，"\r" 会保留在行内；
    # 非 UTF-8 字节按 surrogateescape 解码，只影响所在行
    with open(
        path, "r", encoding="utf-8", errors="surrogateescape", newline="\n"
    ) as f:
        try:
            for line in f:
                line = line.rstrip("\n")
                if is_valid_uuid(line):
                    clusters.append(line)
                    log.info(f"Proper cluster ID: {line}")
                else:
                    log.error(f"Not a proper cluster ID: {line!r}")
                    improper_count += 1
        except OSError as e:
            raise ClusterListReadException(
                path, str(e), clusters=clusters, improper_count=improper_count
            ) from e

    log.info(f"Cluster list finished, number of clusters to delete: {len(clusters)}")
    log.info(f"Cluster list finished, improper cluster entries: {improper_count}")

    return clusters, improper_count


def write_cluster_list(path: str, clusters: Iterable[str]) -> int:
    """
    将集群ID写入文件，格式与 read_cluster_list 的输入一致

    Args:
        path: 输出文件路径
        clusters: 集群ID

    Returns:
        写入的集群数量
    """
    count = 0
    with open(path, "w", encoding="utf-8", newline="") as f:
        for cluster in clusters:
            f.write(f"{cluster}\n")
            count += 1
    return count
