"""
清理结果汇总
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Sequence


@dataclass(frozen=True)
class Summary:
    """清理汇总：输入校验计数和每张表的删除数量"""

    proper_cluster_entries: int
    improper_cluster_entries: int
    deletions_for_table: Dict[str, int] = field(default_factory=dict)

    @property
    def total_deletions(self) -> int:
        """总删除数量（由各表数量求和得到，不单独保存）"""
        return sum(self.deletions_for_table.values())


def build_summary(
    cluster_list: Sequence[str],
    improper_count: int,
    deletions: Mapping[str, int],
) -> Summary:
    """根据读取结果和删除结果构建汇总"""
    return Summary(
        proper_cluster_entries=len(cluster_list),
        improper_cluster_entries=improper_count,
        deletions_for_table=dict(deletions),
    )
