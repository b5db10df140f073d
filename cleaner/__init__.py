"""
Aggregator Cleaner - 识别并清理不再上报数据的集群
"""

__version__ = "1.0.0"
